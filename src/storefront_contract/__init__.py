"""
Storefront Contract - typed operation contracts for the Shopware Store API.

Usage:
    from storefront_contract import StorefrontApi, StoreNavigationType

    async with StorefrontApi.from_env() as api:
        menu = await api.request_navigation(StoreNavigationType.MAIN, depth=2)

Lower level:
    from storefront_contract import STORE_API_CATALOG, Dispatcher, HttpxTransport, ClientConfig

    dispatcher = Dispatcher(STORE_API_CATALOG, HttpxTransport(), ClientConfig.from_env())
    listing = await dispatcher.invoke("searchPage", {"search": "shoe", "limit": 10})
"""

__version__ = "0.1.0"

from .api import ErrorPolicy, RouteName, StorefrontApi, StoreNavigationType
from .catalog import BASE_CATALOG, OVERRIDE_CATALOG, STORE_API_CATALOG
from .config import ClientConfig, load_config
from .core import (
    CatalogError,
    ConfigurationError,
    Fault,
    FaultKind,
    MalformedRequest,
    OperationCatalog,
    OperationContract,
    OperationKey,
    OperationRegistry,
    ParameterDef,
    ProtocolFault,
    RefinementError,
    RefinementSet,
    RequestBodyDef,
    ResponseDef,
    StorefrontContractError,
    StructuredApiFault,
    TransportFault,
    UnexpectedStatus,
    UnknownOperation,
    compose,
)
from .runtime import (
    DispatchResult,
    Dispatcher,
    EncodedRequest,
    HttpxTransport,
    Transport,
    TransportResponse,
    normalize_fault,
)

__all__ = [
    "__version__",
    # Facade
    "StorefrontApi",
    "ErrorPolicy",
    "StoreNavigationType",
    "RouteName",
    # Catalog
    "BASE_CATALOG",
    "OVERRIDE_CATALOG",
    "STORE_API_CATALOG",
    "OperationCatalog",
    "OperationRegistry",
    "OperationContract",
    "OperationKey",
    "ParameterDef",
    "RequestBodyDef",
    "ResponseDef",
    "RefinementSet",
    "compose",
    # Config
    "ClientConfig",
    "load_config",
    # Runtime
    "Dispatcher",
    "DispatchResult",
    "EncodedRequest",
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    "normalize_fault",
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
]
