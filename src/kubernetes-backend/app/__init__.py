"""Kubernetes Backend service application."""
