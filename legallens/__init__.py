"""LegalLens document analysis client."""
