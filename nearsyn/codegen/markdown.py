"""
Markdown documentation rendering.

This module renders an InterfaceModel into a documentation page: the
crate docs, then for every interface a summary table and one detail
section per method, and finally a legend and the generator stamp.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GeneratorConfig

from .base import BaseRenderer
from .type_converter import TypeConverter
from ..model.interface import (
    BADGES,
    PAYABLE_BADGE,
    InterfaceModel,
    InterfaceDecl,
    MethodDecl,
    MethodKind,
)


AUTOGENERATED_NOTICE = '<!-- AUTOGENERATED doc, do not modify! -->'

LEGEND = [
    f'- {BADGES[MethodKind.CONSTRUCTOR]} Initialization method. Needs to be called right after deployment.',
    f'- {BADGES[MethodKind.VIEW]} View only method, *i.e.*, does not modify the contract state.',
    f'- {BADGES[MethodKind.CALL]} Call method, i.e., does modify the contract state.',
    f'- {PAYABLE_BADGE} Payable method, i.e., call needs to have an attached NEAR deposit.',
]


class DocRenderer(BaseRenderer):
    """
    Renders an InterfaceModel as a Markdown page.

    Method badges come from MethodDecl.badge and signatures from the
    same TypeConverter the TypeScript renderer uses.
    """

    def __init__(self, config: 'GeneratorConfig'):
        super().__init__(config)
        self._types = TypeConverter(config)

    def render(self, model: InterfaceModel) -> str:
        """Render the complete documentation page."""
        lines = [AUTOGENERATED_NOTICE, '# Contract', '']
        if not model.doc.is_empty:
            lines.extend(model.doc.lines)
            lines.append('')

        for interface in model.interfaces:
            lines.extend(self.render_interface(interface))

        lines.extend(self.render_footer())
        return '\n'.join(lines) + '\n'

    # =========================================================================
    # INTERFACES
    # =========================================================================

    def render_interface(self, interface: InterfaceDecl) -> List[str]:
        if interface.is_trait:
            lines = [f'## Methods for `{interface.name}` interface', '']
        else:
            lines = [f'## Methods for {interface.name}', '']

        if interface.extends:
            names = ', '.join(f'`{name}`' for name in interface.extends)
            lines.extend([f'Implements {names}.', ''])

        if not interface.doc.is_empty:
            lines.extend(interface.doc.lines)
            lines.append('')

        if not interface.methods:
            return lines

        lines.append('| Method | Description | Return |')
        lines.append('| ------ | ----------- | ------ |')
        for method in interface.methods:
            lines.append(self.render_table_row(method))
        lines.append('')

        for method in interface.methods:
            lines.extend(self.render_method(method))
        return lines

    def render_table_row(self, method: MethodDecl) -> str:
        constructor = ' (_constructor_)' if method.is_constructor else ''
        returns = self._types.ts_type(method.returns).replace('|', '\\|')
        return f'| {method.badge} `{method.name}`{constructor} | {method.doc.summary()} | `{returns}` |'

    def render_method(self, method: MethodDecl) -> List[str]:
        """Render the detail section: heading, signature, and the full doc block."""
        constructor = ' (*constructor*)' if method.is_constructor else ''
        lines = [
            f'### {method.badge} `{method.name}`{constructor}',
            '',
            '```typescript',
            self._types.method_signature(method),
            '```',
            '',
        ]
        if not method.doc.is_empty:
            lines.extend(method.doc.lines)
            lines.append('')
        return lines

    # =========================================================================
    # FOOTER
    # =========================================================================

    def render_footer(self) -> List[str]:
        stamp = f'*This documentation was generated with* **{self._config.stamp}**'
        if self._config.repository:
            stamp += f' <{self._config.repository}>'
        if self._config.now:
            stamp += f' *on {self._config.now}*'
        return ['---', '', 'References', ''] + LEGEND + ['', '---', '', stamp]
