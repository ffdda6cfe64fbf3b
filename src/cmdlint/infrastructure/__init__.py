"""Infrastructure layer — files, package data, HTTP.

This layer depends on stdlib and third-party libs (requests).
It must never import from domain, rules, services, commands, or output;
it may raise the shared exceptions from :mod:`cmdlint.errors`.
"""
