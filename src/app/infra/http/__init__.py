"""Transporte HTTP da integração com a API de citas."""

from app.infra.http.client import HttpClient, HttpClientConfig, extract_error_message

__all__ = ["HttpClient", "HttpClientConfig", "extract_error_message"]
