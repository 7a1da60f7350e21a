"""Stages of a scan: read documents, compare them, present the report."""
