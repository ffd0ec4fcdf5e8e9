"""
Configuration module.

Holds the indicator parameter defaults, the YAML-backed loader with
instrument and session overrides, and parameter validation.
"""
