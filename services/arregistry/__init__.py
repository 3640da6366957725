"""Terraform registry backed by Artifact Registry generic repositories."""

__version__ = "0.1.0"
