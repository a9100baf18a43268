"""Accessions report: filtered accession listings from an archival store."""

__version__ = "1.0.0"
