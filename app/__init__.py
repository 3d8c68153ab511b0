"""HTTP surface for the lighthouse simulation."""
