"""
Utility modules: exceptions, token handling and request dependencies.
"""
