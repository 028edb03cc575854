#!/usr/bin/env python3
"""
Test suite for the agent discovery engine.

    # Run all tests
    python -m pytest tests/ -v

Repository and API tests run against in-memory SQLite; stored embeddings use
the JSON variant of the vector column there. No external services are needed.
"""
