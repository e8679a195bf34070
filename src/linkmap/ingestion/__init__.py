"""Document retrieval."""

from linkmap.ingestion.loader import DocumentLoader, candidate_locations, is_url

__all__ = ["DocumentLoader", "candidate_locations", "is_url"]
