from .configs import DEFAULT_DB_MASTER_USER, DatabaseConfig, ProxyTuning, resolve_rds_proxy

__all__ = ["DEFAULT_DB_MASTER_USER", "DatabaseConfig", "ProxyTuning", "resolve_rds_proxy"]
