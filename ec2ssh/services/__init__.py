"""
Services used by the connection flow.
"""
