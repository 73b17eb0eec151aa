"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zOSMF Client, a product of Garudex Labs

Parameters for starting a TSO address space.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from zosmf_client.config.settings import TsoConfig
from zosmf_client.core.validation import check_not_empty
from zosmf_client.exceptions import InvalidArgumentError
from zosmf_client.zostso import constants


@dataclass(frozen=True)
class StartTsoParams:
    """Logon attributes of a TSO address space."""

    account: str
    proc: str = constants.DEFAULT_PROC
    charset: str = constants.DEFAULT_CHARSET
    codepage: str = constants.DEFAULT_CODEPAGE
    rows: int = constants.DEFAULT_ROWS
    cols: int = constants.DEFAULT_COLS
    region_size: int = constants.DEFAULT_REGION_SIZE

    def __post_init__(self) -> None:
        check_not_empty(self.account, "account")
        check_not_empty(self.proc, "proc")
        for name in ("rows", "cols", "region_size"):
            if getattr(self, name) < 1:
                raise InvalidArgumentError(f"{name} must be at least 1")

    @classmethod
    def from_config(cls, config: TsoConfig, account: Optional[str] = None) -> "StartTsoParams":
        """Build params from configured defaults; account overrides the configured one."""
        return cls(
            account=account if account is not None else config.account,
            proc=config.proc,
            charset=config.charset,
            codepage=config.codepage,
            rows=config.rows,
            cols=config.cols,
            region_size=config.region_size,
        )

    def query_params(self) -> Dict[str, str]:
        return {
            constants.QUERY_ACCOUNT: self.account.strip(),
            constants.QUERY_PROC: self.proc,
            constants.QUERY_CHARSET: self.charset,
            constants.QUERY_CODEPAGE: self.codepage,
            constants.QUERY_ROWS: str(self.rows),
            constants.QUERY_COLS: str(self.cols),
            constants.QUERY_REGION_SIZE: str(self.region_size),
        }
