"""Infrastructure Package

This package contains infrastructure layer components that handle the
external key-value engine, credential hashing and logging.
"""
