"""Routing — path templates, multi-match lookup, and reverse routing.

Routes are registered during setup and tried in registration order;
every matching route is returned so callers can run them as a chain.
"""
