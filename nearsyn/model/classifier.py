"""
Method classification.

Assigns each exported method a single MethodKind plus its deposit and
gas flags. Both renderers read these fields; neither inspects the
signature again.
"""

from ..parser.ast_nodes import FnItem
from ..type_system import TypeResolver, Alias, AMOUNT_TYPE
from .docs import DocBlock
from .interface import MethodDecl, MethodKind, ParamDecl


CONSTRUCTOR_ATTRIBUTE = 'init'
PAYABLE_ATTRIBUTE = 'payable'

# Amount-typed parameters with these names carry the attached deposit
DEPOSIT_PARAMETERS = ('deposit', 'attached_deposit')


class MethodClassifier:
    """
    Classifies method signatures.

    Rules, first match wins:
    1. `#[init]` makes a Constructor returning the contract type.
    2. A mutable receiver, an amount-typed parameter, or `#[payable]`
       makes a Call.
    3. Anything else is a View.
    """

    def __init__(self, resolver: TypeResolver):
        self.resolver = resolver

    def classify(self, fn: FnItem, self_name: str, doc: DocBlock = DocBlock()) -> MethodDecl:
        """
        Build the MethodDecl for one exported method.

        Args:
            fn: The method signature
            self_name: The type the enclosing impl block is for
            doc: The method's doc block

        Returns:
            The classified method

        Raises:
            UnsupportedType: if a parameter or return type cannot be resolved
        """
        item_name = f'{self_name}::{fn.name}' if self_name else fn.name
        params = tuple(
            ParamDecl(param.name, self.resolver.resolve(param.type_expr, item_name, self_name))
            for param in fn.parameters
        )

        if fn.has_attribute(CONSTRUCTOR_ATTRIBUTE):
            return MethodDecl(
                name=fn.name,
                kind=MethodKind.CONSTRUCTOR,
                params=params,
                returns=Alias(self_name),
                doc=doc,
            )

        returns = None
        if fn.return_type is not None:
            returns = self.resolver.resolve(fn.return_type, item_name, self_name)

        amount = Alias(AMOUNT_TYPE)
        is_payable = fn.has_attribute(PAYABLE_ATTRIBUTE)
        is_mutable = fn.receiver is not None and fn.receiver.is_mutable
        takes_amount = any(param.type_ref == amount for param in params)

        if is_mutable or takes_amount or is_payable:
            accepts_deposit = is_payable or any(
                param.type_ref == amount and param.name in DEPOSIT_PARAMETERS
                for param in params
            )
            return MethodDecl(
                name=fn.name,
                kind=MethodKind.CALL,
                params=params,
                returns=returns,
                accepts_deposit=accepts_deposit,
                accepts_gas=True,
                doc=doc,
            )

        return MethodDecl(
            name=fn.name,
            kind=MethodKind.VIEW,
            params=params,
            returns=returns,
            doc=doc,
        )
