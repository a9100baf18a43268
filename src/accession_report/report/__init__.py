"""Accessions report core: parameter resolution, query composition, row decoding."""
