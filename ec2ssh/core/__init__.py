"""
Core settings, logging, deadline and exceptions.
"""
