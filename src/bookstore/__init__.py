"""Bookstore HTTP JSON API.

A small FastAPI service exposing book records (ISBN, title, author, price)
stored in a relational database through a repository layer.
"""

__version__ = "0.1.0"
