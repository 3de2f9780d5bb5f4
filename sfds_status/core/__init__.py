"""Probe pipeline: transport, authentication, queries, flattening, rendering."""
