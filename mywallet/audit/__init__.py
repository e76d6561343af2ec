"""Audit logging package."""

from mywallet.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
