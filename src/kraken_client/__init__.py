"""Kraken REST API client with signed private requests and validated domain models."""
