"""
Core layer: correlation context management and configuration.

Independent of any web framework or HTTP library; the adapters in
``correlate.http`` build on it.
"""
