# -*- coding: utf-8 -*-
"""
sitegen REST API Module

A FastAPI-based REST API for programmatic access to sitegen.
"""

from .app import create_app, run_server

__all__ = ["create_app", "run_server"]
