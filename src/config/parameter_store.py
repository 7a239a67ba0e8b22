import logging
import os
from typing import Optional

import boto3

logger = logging.getLogger(__name__)

class ParameterStoreClient:
    def __init__(self, region_name: Optional[str] = None):
        self.region_name = region_name or os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION", "us-east-1")
        self.client = boto3.client('ssm', region_name=self.region_name)
        self.prefix = "weather-now"

    def get_parameter(self, parameter_name: str, with_decryption: bool = True) -> Optional[str]:
        """Get a parameter from AWS Parameter Store."""
        try:
            full_name = f"{self.prefix}-{parameter_name}"
            response = self.client.get_parameter(
                Name=full_name,
                WithDecryption=with_decryption
            )
            value = response.get('Parameter', {}).get('Value')
            return str(value) if value is not None else None
        except Exception as e:
            logger.error(f"Failed to get parameter {parameter_name}: {str(e)}")
            return None

# Global instance
parameter_store = ParameterStoreClient()
