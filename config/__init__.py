"""Configuration management package for the named timer registry.

This package provides the settings models and the YAML configuration
manager used to build timer registries and set up logging.
"""
