"""LLM access package.

Module split:
    - `provider_config`: environment-driven provider and deployment settings.
    - `service`: prompt-document-to-payload adapter and response mapper.
    - `client`: HTTP transport and failure classification.
"""
