"""
Core document handling: the PathStore, value normalization, settings and loading.
"""
