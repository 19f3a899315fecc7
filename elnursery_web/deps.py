"""Shared FastAPI dependencies"""

from typing import Optional

from fastapi import HTTPException

from elnursery.app import ElnurseryApp

# Global Elnursery app instance (set by main.py)
_app_instance: Optional[ElnurseryApp] = None


def set_app_instance(instance: Optional[ElnurseryApp]):
    """Set the global app instance"""
    global _app_instance
    _app_instance = instance


def get_app() -> ElnurseryApp:
    """Dependency to get the Elnursery app instance"""
    if _app_instance is None:
        raise HTTPException(status_code=500, detail="Application not initialized")
    return _app_instance
