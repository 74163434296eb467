"""
Data sanitization utilities for logging sensitive information
"""
import re
from typing import Optional, Dict, Any

class DataSanitizer:
    """Sanitize sensitive data before logging"""

    SENSITIVE_FIELDS = {
        'password', 'token', 'secret', 'authorization', 'jwt', 'bearer'
    }

    SENSITIVE_PATTERNS = [
        (r'Bearer\s+[\w\-\.]+', 'Bearer [REDACTED]'),
        (r'"password"\s*:\s*"[^"]*"', '"password":"[REDACTED]"'),
        (r'"(access)?token"\s*:\s*"[^"]*"', '"token":"[REDACTED]"'),
    ]

    MAX_TEXT_SIZE = 2000

    @staticmethod
    def sanitize_dict(data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively sanitize dictionary data"""
        if not isinstance(data, dict):
            return data

        sanitized = {}
        for key, value in data.items():
            if any(sensitive in key.lower() for sensitive in DataSanitizer.SENSITIVE_FIELDS):
                sanitized[key] = "[REDACTED]"
            elif isinstance(value, dict):
                sanitized[key] = DataSanitizer.sanitize_dict(value)
            elif isinstance(value, list):
                sanitized[key] = [
                    DataSanitizer.sanitize_dict(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                sanitized[key] = value

        return sanitized

    @staticmethod
    def sanitize_string(text: Optional[str]) -> Optional[str]:
        """Sanitize sensitive patterns from string data"""
        if not text:
            return text

        if len(text) > DataSanitizer.MAX_TEXT_SIZE:
            text = text[:DataSanitizer.MAX_TEXT_SIZE] + "...[TRUNCATED]"

        sanitized = text
        for pattern, replacement in DataSanitizer.SENSITIVE_PATTERNS:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
