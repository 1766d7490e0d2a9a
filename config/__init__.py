"""Storefront project package. Importing it registers the default MongoDB connection."""
from .mongodb import connect_mongodb

connect_mongodb()

__all__ = ()
