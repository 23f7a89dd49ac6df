from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

from aws_cdk import Duration, aws_rds as rds, aws_secretsmanager as secretsmanager

from cdk_serverless_lamp.exceptions import ValidationError

DEFAULT_DB_MASTER_USER = "admin"


def resolve_rds_proxy(rds_proxy: Optional[bool]) -> bool:
    """Unset and True enable the proxy; only an explicit False disables it."""
    return rds_proxy is not False


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings handed to the API function"""
    writer_endpoint: str
    reader_endpoint: Optional[str] = None
    master_user_name: Optional[str] = None
    master_user_password_secret: Optional[secretsmanager.ISecret] = None

    def __post_init__(self):
        if not self.writer_endpoint:
            raise ValidationError("DatabaseConfig.writer_endpoint is required")

    def effective_reader_endpoint(self) -> str:
        return self.reader_endpoint or self.writer_endpoint

    def effective_master_user_name(self) -> str:
        return self.master_user_name or DEFAULT_DB_MASTER_USER


@dataclass
class ProxyTuning:
    """Optional RDS Proxy settings; unset fields keep the CDK defaults"""
    borrow_timeout: Optional[Duration] = None
    idle_client_timeout: Optional[Duration] = None
    max_connections_percent: Optional[int] = None
    max_idle_connections_percent: Optional[int] = None
    require_tls: Optional[bool] = None
    debug_logging: Optional[bool] = None
    session_pinning_filters: Optional[List[rds.SessionPinningFilter]] = None
    init_query: Optional[str] = None

    def to_kwargs(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}
