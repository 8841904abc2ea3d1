"""
Core module - contract definitions, catalogs, refinements and errors.
"""

from __future__ import annotations

from .catalog import OperationCatalog, OperationRegistry, compose
from .defs import (
    OperationContract,
    OperationKey,
    ParameterDef,
    RequestBodyDef,
    ResponseDef,
    TemplateQueryItem,
)
from .errors import (
    CatalogError,
    ConfigurationError,
    Fault,
    FaultKind,
    MalformedRequest,
    ProtocolFault,
    RefinementError,
    StorefrontContractError,
    StructuredApiFault,
    TransportFault,
    UnexpectedStatus,
    UnknownOperation,
)
from .models import ContractModel, EntityModel, RequestModel
from .refinement import Refinement, RefinementSet, referenced_models
from .utils import format_scalar, to_camel_case

__all__ = [
    # Definitions
    "OperationKey",
    "TemplateQueryItem",
    "ParameterDef",
    "RequestBodyDef",
    "ResponseDef",
    "OperationContract",
    # Catalog
    "OperationCatalog",
    "OperationRegistry",
    "compose",
    # Errors
    "StorefrontContractError",
    "CatalogError",
    "RefinementError",
    "ConfigurationError",
    "Fault",
    "FaultKind",
    "UnknownOperation",
    "MalformedRequest",
    "TransportFault",
    "StructuredApiFault",
    "ProtocolFault",
    "UnexpectedStatus",
    # Models
    "ContractModel",
    "EntityModel",
    "RequestModel",
    # Refinement
    "Refinement",
    "RefinementSet",
    "referenced_models",
    # Utils
    "to_camel_case",
    "format_scalar",
]
