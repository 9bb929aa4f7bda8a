"""
Core modules for sectionconf.

- config: Schema descriptors, elements, collections, sections and documents
- utils: Logging and library-level settings
"""
