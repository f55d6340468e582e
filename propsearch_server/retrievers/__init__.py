"""
Retrievers module: clients for the search engine and the geocoding API.
"""
from .base import GeocodingProvider, SearchBackend
from .elastic import ElasticsearchRetriever
from .google_maps import GoogleMapsRetriever

__all__ = [
    "GeocodingProvider",
    "SearchBackend",
    "ElasticsearchRetriever",
    "GoogleMapsRetriever",
]
