"""Module: __init__.py

Author: Michael Economou
Date: 2026-03-02

Core package: listing view, selection engine, transfer queue, ingestion
and the dual-pane browser coordinator. Nothing in here imports Qt.
"""
