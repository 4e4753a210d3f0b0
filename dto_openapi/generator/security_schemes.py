"""
Security Schemes - builders for OpenAPI `components.securitySchemes` entries.

Supports:
- Bearer tokens (JWT)
- API keys
- Basic authentication
- OAuth2 (authorization code and client credentials flows)
"""

from typing import Any, Dict, Optional


class SecuritySchemes:
    """Static builders returning `{name: scheme}` mappings"""

    @staticmethod
    def bearer_token(name: str = "bearerAuth") -> Dict[str, Any]:
        return {
            name: {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
            },
        }

    @staticmethod
    def api_key(name: str = "apiKey", param_name: str = "X-API-Key", location: str = "header") -> Dict[str, Any]:
        """
        API key scheme

        Args:
            name: Scheme name
            param_name: Header, query parameter or cookie name
            location: "header", "query" or "cookie"
        """
        return {
            name: {
                "type": "apiKey",
                "name": param_name,
                "in": location,
            },
        }

    @staticmethod
    def basic_auth(name: str = "basicAuth") -> Dict[str, Any]:
        return {
            name: {
                "type": "http",
                "scheme": "basic",
            },
        }

    @staticmethod
    def oauth2(name: str = "oauth2", flows: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return {
            name: {
                "type": "oauth2",
                "flows": flows or {},
            },
        }

    @staticmethod
    def oauth2_authorization_code(
        authorization_url: str,
        token_url: str,
        scopes: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        return {
            "authorizationCode": {
                "authorizationUrl": authorization_url,
                "tokenUrl": token_url,
                "scopes": scopes or {},
            },
        }

    @staticmethod
    def oauth2_client_credentials(token_url: str, scopes: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        return {
            "clientCredentials": {
                "tokenUrl": token_url,
                "scopes": scopes or {},
            },
        }
