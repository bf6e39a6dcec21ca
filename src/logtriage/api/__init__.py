# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""HTTP API for uploading and inspecting classified log files."""
