"""Service layer — evaluation, aggregation, and the batch driver.

Services may import from domain, rules and infrastructure layers.
They must never import from commands or output.
"""
