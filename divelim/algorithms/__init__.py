"""Flow algorithms over `divelim.graph.flow_network.FlowNetwork`."""
