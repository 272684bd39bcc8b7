"""Design-to-code engine package.

Modules:
- inference: scene reading, pattern classification, synthesis, emission
- export: project skeleton for the deployment hand-off
- settings / config: heuristic constants and service configuration
- logging_config: file + console loggers for the engine and API
"""
