"""ASGI middleware installed by `create_app`.

- json_body: rejects malformed JSON request bodies with 400
- request_logger: one log line per inbound request
"""
