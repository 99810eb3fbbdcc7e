"""
TypeScript bindings rendering.

This module renders an InterfaceModel into TypeScript declarations: a
prelude for the NEAR SDK wrapper types, one declaration per model item,
the `extends` declarations, and the method-name lists used by
near-api-js contract objects.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GeneratorConfig

from .base import BaseRenderer
from .type_converter import TypeConverter
from ..model.docs import DocBlock
from ..model.interface import (
    InterfaceModel,
    TypeAliasDecl,
    RecordDecl,
    EnumDecl,
    InterfaceDecl,
)
from ..type_system.mappings import wrapper_types


class TsRenderer(BaseRenderer):
    """
    Renders an InterfaceModel as TypeScript bindings.

    The output is a pure function of the model and the configuration.
    """

    def __init__(self, config: 'GeneratorConfig'):
        super().__init__(config)
        self._types = TypeConverter(config)

    def render(self, model: InterfaceModel) -> str:
        """Render the complete bindings file."""
        lines: List[str] = []
        lines.extend(self.render_header())
        lines.extend(self.render_prelude())

        for item in model.items:
            if isinstance(item, TypeAliasDecl):
                lines.extend(self.render_alias(item))
            elif isinstance(item, RecordDecl):
                lines.extend(self.render_record(item))
            elif isinstance(item, EnumDecl):
                lines.extend(self.render_enum(item))
            elif isinstance(item, InterfaceDecl):
                lines.extend(self.render_interface(item))

        for interface in model.interfaces:
            if interface.extends:
                lines.append(f'export interface {interface.name} extends {", ".join(interface.extends)} {{}}')
                lines.append('')

        lines.extend(self.render_contract_methods(model))
        return '\n'.join(lines) + '\n'

    # =========================================================================
    # HEADER AND PRELUDE
    # =========================================================================

    def render_header(self) -> List[str]:
        header = f'// TypeScript bindings generated with {self.stamp()}'
        if self._config.now:
            header += f' on {self._config.now}'
        return [header, '']

    def render_prelude(self) -> List[str]:
        """Declare every wrapper type the catalog renders by name."""
        lines = ['// Exports common NEAR Rust SDK types', '']
        for name, (definition, doc) in wrapper_types(self._config.extra_types).items():
            lines.extend(self.doc_comment(DocBlock(tuple(doc))))
            lines.append(f'export type {name} = {definition};')
            lines.append('')
        return lines

    # =========================================================================
    # DECLARATIONS
    # =========================================================================

    def render_alias(self, alias: TypeAliasDecl) -> List[str]:
        lines = self.doc_comment(alias.doc)
        lines.append(f'export type {alias.name} = {self._types.ts_type(alias.target)};')
        lines.append('')
        return lines

    def render_record(self, record: RecordDecl) -> List[str]:
        lines = self.doc_comment(record.doc)
        lines.append(f'export type {record.name} = {{')
        for field in record.fields:
            lines.extend(self.doc_comment(field.doc, 1))
            lines.append(f'{self.indent()}{field.name}: {self._types.ts_type(field.type_ref)};')
            lines.append('')
        lines.append('}')
        lines.append('')
        return lines

    def render_enum(self, enum: EnumDecl) -> List[str]:
        lines = self.doc_comment(enum.doc)
        lines.append(f'export enum {enum.name} {{')
        for variant in enum.variants:
            lines.extend(self.doc_comment(variant.doc, 1))
            lines.append(f'{self.indent()}{variant.name},')
            lines.append('')
        lines.append('}')
        lines.append('')
        return lines

    def render_interface(self, interface: InterfaceDecl) -> List[str]:
        """Render an interface body; one that only extends others has none."""
        if not interface.methods and interface.extends:
            return []

        lines = self.doc_comment(interface.doc)
        lines.append(f'export interface {interface.name} {{')
        for method in interface.methods:
            lines.extend(self.doc_comment(method.doc, 1))
            lines.append(f'{self.indent()}{self._types.method_signature(method)}')
            lines.append('')
        lines.append('}')
        lines.append('')
        return lines

    # =========================================================================
    # CONTRACT METHODS
    # =========================================================================

    def render_contract_methods(self, model: InterfaceModel) -> List[str]:
        """Render the view/change method name lists for the contract."""
        lines = [f'export const {model.contract_name}Methods = {{']
        for key, names in (('viewMethods', model.view_methods), ('changeMethods', model.change_methods)):
            lines.append(f'{self.indent()}{key}: [')
            for name in names:
                lines.append(f'{self.indent(2)}"{name}",')
            lines.append(f'{self.indent()}],')
        lines.append('};')
        return lines
