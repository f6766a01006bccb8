"""Dependency injection container assembly utilities."""

from question_bank.dependency_injection.container import build_container, build_job_processor, get_container

__all__ = ["build_container", "build_job_processor", "get_container"]
