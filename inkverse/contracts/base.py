#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base Contract Classes

Defines the foundation for the data handed to the export pipeline and
the errors the pipeline raises.
Contracts are immutable per export, serializable, and validatable.

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional
from datetime import datetime, timezone
import json


class ContractError(Exception):
    """Base error for contract violations"""
    pass


class ContractValidationError(ContractError):
    """Raised when contract validation fails"""
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Contract validation failed: {errors}")


class ExportError(ContractError):
    """Base error for failures that abort an export"""
    pass


class UnsupportedAsset(ExportError):
    """Raised when an inline image payload cannot be decoded or classified"""
    def __init__(self, reason: str, index: Optional[int] = None):
        self.reason = reason
        self.index = index
        where = f" (work #{index + 1})" if index is not None else ""
        super().__init__(f"Unsupported image{where}: {reason}")


class PackagingInvariantViolation(ExportError):
    """Raised when manifest, spine, navigation and packed entries disagree"""
    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__(f"Packaging invariant violated: {problems}")


@dataclass
class ContractMetadata:
    """Metadata for all contracts"""
    version: str = "1.0"
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    source: str = ""


class BaseContract(ABC):
    """
    Abstract base class for pipeline contracts.

    All contracts must:
    1. Be serializable to JSON
    2. Be deserializable from JSON
    3. Be validatable
    4. Have metadata
    """

    @property
    @abstractmethod
    def metadata(self) -> ContractMetadata:
        """Contract metadata"""
        pass

    @abstractmethod
    def to_dict(self) -> Any:
        """Convert contract to JSON-compatible data"""
        pass

    def to_json(self, indent: int = 2) -> str:
        """Convert contract to JSON string"""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Any) -> 'BaseContract':
        """Create contract from JSON-compatible data"""
        pass

    @classmethod
    def from_json(cls, json_str: str) -> 'BaseContract':
        """Create contract from JSON string"""
        data = json.loads(json_str)
        return cls.from_dict(data)

    @abstractmethod
    def validate(self) -> List[str]:
        """
        Validate contract.
        Returns list of validation errors (empty if valid).
        """
        pass

    def is_valid(self) -> bool:
        """Check if contract is valid"""
        return len(self.validate()) == 0

    def assert_valid(self) -> None:
        """Raise error if contract is invalid"""
        errors = self.validate()
        if errors:
            raise ContractValidationError(errors)

    def __repr__(self) -> str:
        """String representation"""
        return f"<{self.__class__.__name__}(source={self.metadata.source})>"
