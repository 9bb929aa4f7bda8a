"""
Utils module for sectionconf core functionality.

This module contains:
- Library configuration (environment and .env driven)
- Logging utilities
"""
