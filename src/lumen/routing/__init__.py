"""Routing — ordered route table with header and query constraints.

Routes are registered during setup and resolved per request by method,
then by constraints, first match wins.
"""
