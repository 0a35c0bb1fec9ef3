"""Graph core — store, queries, cycle detection, and snapshot codec.

Modules here depend on the domain and infrastructure layers only.
"""
