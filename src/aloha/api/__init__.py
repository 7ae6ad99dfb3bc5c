"""Aloha Nails AI Photoshoot — FastAPI REST API layer.

This package contains the FastAPI application, Pydantic request/response
models, brief validation, and the prompt composition logic.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response validation.
validation
    Creative brief validation and the generic client-facing error.
prompt_builder
    Composer option sets and prompt compilation.
"""
