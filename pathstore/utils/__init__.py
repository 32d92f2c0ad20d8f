"""
Leaf utilities consumed by the PathStore: value coercion and byte-size parsing.
"""
