"""Number domain package.

This package contains the immutable `Number` value type used for exact monetary and quantity
arithmetic, together with the errors it raises.
"""
