from .router import OperationRouter
from .schema import OPERATIONS, describe_operations, optional_parameters, required_parameters

__all__ = [
    "OPERATIONS",
    "OperationRouter",
    "describe_operations",
    "optional_parameters",
    "required_parameters",
]
