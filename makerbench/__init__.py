"""
MakerBench Tool Suggestions
===========================

Backend for the "Suggest a Tool" form of the MakerBench tool directory.
Submissions arrive as multipart/form-data and leave as pull requests
against the repository holding public/tools.json.

Components:
- services: Multipart decoding, directory codec, GitHub client, submission flow
- api: FastAPI endpoints and error handling
- models: Pydantic data models
- core: Configuration and dependencies
"""

__version__ = "1.0.0"
