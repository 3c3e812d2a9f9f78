"""Workflow orchestration for visiting pages and reconciling their phone numbers."""

from .service import PhoneAuditOrchestrator

__all__ = ["PhoneAuditOrchestrator"]
