"""fqcn - Resolve PSR-4 namespaces to directories and the constructs declared in them."""

from fqcn.namespace import Psr4Namespace
from fqcn.resolver import Resolver, create_resolver

__version__ = "0.1.0"
__all__ = ["Psr4Namespace", "Resolver", "create_resolver", "__version__"]
