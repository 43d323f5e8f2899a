"""Graph primitives and helpers.

This package provides the flow network type `FlowNetwork` and helper modules
for conversion to NetworkX (`convert`) and serialization (`io`).
"""
