"""
Interface Model construction.

The ModelBuilder folds the parsed declarations of one or more source
files, in file order, into a single InterfaceModel. Type aliases,
records, and enums are unique by name. Interfaces are assembled from
every `#[near_bindgen]` impl block that names them; a method redefined
by a later block replaces the earlier one in place.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..codegen.diagnostics import GeneratorDiagnostics
from ..errors import UnsupportedType
from ..parser.ast_nodes import (
    Item,
    FnItem,
    TypeAliasItem,
    StructItem,
    EnumItem,
    TraitItem,
    ImplItem,
    ModItem,
    SourceFile,
)
from ..type_system import (
    TypeResolver,
    TypeRegistry,
    TypeRef,
    Primitive,
    Container,
    ContainerKind,
)
from .classifier import MethodClassifier
from .docs import DocBlock, DocExtractor
from .interface import (
    Declaration,
    TypeAliasDecl,
    FieldDecl,
    RecordDecl,
    VariantDecl,
    EnumDecl,
    MethodDecl,
    InterfaceDecl,
    InterfaceModel,
)


DEFAULT_BINDGEN_ATTRIBUTE = 'near_bindgen'
PRIVATE_ATTRIBUTE = 'private'


@dataclass
class _InterfaceFragments:
    """Mutable accumulator for one interface while sources are consumed."""
    name: str
    is_trait: bool = False
    doc: DocBlock = field(default_factory=DocBlock)
    methods: Dict[str, MethodDecl] = field(default_factory=dict)
    extends: List[str] = field(default_factory=list)

    def freeze(self) -> InterfaceDecl:
        return InterfaceDecl(
            name=self.name,
            methods=tuple(self.methods.values()),
            extends=tuple(self.extends),
            doc=self.doc,
            is_trait=self.is_trait,
        )


class ModelBuilder:
    """
    Builds an InterfaceModel from parsed source files.

    A builder is used once: call build() with every source file of the
    contract. Traits are collected from all files first so that their
    docs can be forwarded to impl blocks declared earlier.
    """

    def __init__(
        self,
        resolver: Optional[TypeResolver] = None,
        diagnostics: Optional[GeneratorDiagnostics] = None,
        bindgen_attribute: str = DEFAULT_BINDGEN_ATTRIBUTE,
    ):
        self.resolver = resolver or TypeResolver()
        self.diagnostics = diagnostics or GeneratorDiagnostics()
        self.bindgen_attribute = bindgen_attribute
        self.extractor = DocExtractor(self.diagnostics)
        self.classifier = MethodClassifier(self.resolver)
        self.registry = TypeRegistry(self.resolver.wrappers)

        self._order: List[str] = []
        self._types: Dict[str, Declaration] = {}
        self._interfaces: Dict[str, _InterfaceFragments] = {}
        self._traits: Dict[str, TraitItem] = {}
        self._crate_doc = DocBlock()
        self._file_path = ''

        # Contract name candidates, by precedence
        self._impl_name = ''
        self._struct_name = ''
        self._trait_impl_name = ''

    # =========================================================================
    # ENTRY POINT
    # =========================================================================

    def build(self, sources: List[SourceFile]) -> InterfaceModel:
        """
        Fold the declarations of `sources` into an InterfaceModel.

        Args:
            sources: Parsed source files, in the order they were given

        Returns:
            The immutable InterfaceModel

        Raises:
            UnsupportedType: if a declaration uses a type with no output form
            DuplicateIncompatibleDecl: if a name is declared twice incompatibly
        """
        for source in sources:
            self._collect_traits(source.items)

        for source in sources:
            self._file_path = source.path
            if self._crate_doc.is_empty:
                self._crate_doc = self.extractor.extract_inner(source.inner_doc_span, source.path)
            self._add_items(source.items)

        for type_name, item_name in self.registry.unresolved():
            self.diagnostics.info_unresolved_type(type_name, item_name)

        items = []
        for name in self._order:
            if name in self._interfaces:
                items.append(self._interfaces[name].freeze())
            else:
                items.append(self._types[name])

        return InterfaceModel(
            items=tuple(items),
            contract_name=self._impl_name or self._struct_name or self._trait_impl_name,
            doc=self._crate_doc,
        )

    def _collect_traits(self, items: List[Item]) -> None:
        for item in items:
            if isinstance(item, TraitItem):
                self._traits[item.name] = item
            elif isinstance(item, ModItem) and not self._is_test_module(item):
                self._collect_traits(item.items)

    def _add_items(self, items: List[Item]) -> None:
        for item in items:
            if isinstance(item, ModItem):
                if not self._is_test_module(item):
                    self._add_items(item.items)
            elif isinstance(item, TypeAliasItem):
                self._add_alias(item)
            elif isinstance(item, StructItem):
                self._add_struct(item)
            elif isinstance(item, EnumItem):
                self._add_enum(item)
            elif isinstance(item, ImplItem):
                self._add_impl(item)

    # =========================================================================
    # TYPE DECLARATIONS
    # =========================================================================

    def _add_alias(self, item: TypeAliasItem) -> None:
        self._reject_generics(item.name, item.generics)
        self._insert(TypeAliasDecl(
            name=item.name,
            target=self._resolve(item.target, item.name),
            doc=self._doc(item),
        ))

    def _add_struct(self, item: StructItem) -> None:
        if item.has_attribute(self.bindgen_attribute) and not self._struct_name:
            self._struct_name = item.name
        if not item.is_serde:
            return
        self._reject_generics(item.name, item.generics)
        doc = self._doc(item)

        if item.style == 'named':
            fields = tuple(
                FieldDecl(
                    name=f.name,
                    type_ref=self._resolve(f.type_expr, item.name),
                    doc=self._doc(f, f'{item.name}.{f.name}'),
                )
                for f in item.fields
            )
            self._insert(RecordDecl(name=item.name, fields=fields, doc=doc))
            return

        # Newtype and tuple structs serialize as their contents
        elements = [self._resolve(t, item.name) for t in item.tuple_fields]
        if len(elements) == 1:
            target = elements[0]
        elif elements:
            target = Container(ContainerKind.TUPLE, tuple(elements))
        else:
            target = Primitive('null')
        self._insert(TypeAliasDecl(name=item.name, target=target, doc=doc))

    def _add_enum(self, item: EnumItem) -> None:
        if not item.is_serde:
            return
        self._reject_generics(item.name, item.generics)

        variants = []
        for variant in item.variants:
            if variant.payload:
                self.diagnostics.warn_enum_payload_dropped(
                    item.name, variant.name, self._file_path, variant.line)
            variants.append(VariantDecl(
                name=variant.name,
                doc=self._doc(variant, f'{item.name}::{variant.name}'),
            ))
        self._insert(EnumDecl(name=item.name, variants=tuple(variants), doc=self._doc(item)))

    def _insert(self, decl: Declaration) -> None:
        self.registry.declare(decl.name, decl.kind)
        self._order.append(decl.name)
        self._types[decl.name] = decl

    # =========================================================================
    # INTERFACES
    # =========================================================================

    def _add_impl(self, impl: ImplItem) -> None:
        if not impl.has_attribute(self.bindgen_attribute):
            return
        self_name = impl.name
        if not self_name:
            self.diagnostics.warn_item_skipped(
                'impl', f'self type `{impl.self_type}` is not a named type',
                self._file_path, impl.line)
            return

        trait = self._traits.get(impl.trait_name) if impl.trait_name else None
        doc = self._doc(impl, impl.trait_name or self_name)
        if trait is not None:
            doc = doc + self._doc(trait)

        if impl.trait_name:
            interface = self._interface(impl.trait_name, is_trait=True)
            self._extend(self_name, impl.trait_name)
            if not self._trait_impl_name:
                self._trait_impl_name = self_name
        else:
            interface = self._interface(self_name)
            if not self._impl_name:
                self._impl_name = self_name

        if interface.doc.is_empty:
            interface.doc = doc

        for fn in impl.methods:
            if not self._is_exported(fn, impl):
                continue
            method_doc = self._doc(fn, f'{interface.name}::{fn.name}')
            if trait is not None:
                trait_fn = next((m for m in trait.methods if m.name == fn.name), None)
                if trait_fn is not None:
                    method_doc = method_doc + self._doc(trait_fn, f'{trait.name}::{fn.name}')

            method = self.classifier.classify(fn, self_name, method_doc)
            for param in method.params:
                self.registry.record_references(param.type_ref, f'{interface.name}::{fn.name}')
            if method.returns is not None:
                self.registry.record_references(method.returns, f'{interface.name}::{fn.name}')

            # Last fragment wins; the first position is kept
            interface.methods[fn.name] = method

    def _interface(self, name: str, is_trait: bool = False) -> _InterfaceFragments:
        """Get the accumulator for `name`, creating it on first sight."""
        if self.registry.declare(name, InterfaceDecl.kind):
            self._order.append(name)
            self._interfaces[name] = _InterfaceFragments(name=name, is_trait=is_trait)
        return self._interfaces[name]

    def _extend(self, name: str, base: str) -> None:
        interface = self._interface(name)
        if base not in interface.extends:
            interface.extends.append(base)

    def _is_exported(self, fn: FnItem, impl: ImplItem) -> bool:
        return (fn.is_public or impl.trait_name is not None) and not fn.has_attribute(PRIVATE_ATTRIBUTE)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _doc(self, item: Item, name: str = '') -> DocBlock:
        return self.extractor.extract(item.doc_span, name or item.name, self._file_path, item.line)

    def _resolve(self, type_expr, item_name: str) -> TypeRef:
        ref = self.resolver.resolve(type_expr, item_name)
        self.registry.record_references(ref, item_name)
        return ref

    def _reject_generics(self, name: str, generics: List[str]) -> None:
        type_params = [g for g in generics if not g.startswith("'")]
        if type_params:
            raise UnsupportedType(
                f"{name}<{', '.join(type_params)}>", name,
                'generic type parameters are not supported',
            )

    @staticmethod
    def _is_test_module(module: ModItem) -> bool:
        return any(
            attr.name == 'cfg' and 'test' in attr.args
            for attr in module.attributes
        )
