"""
Generation settings shared by the model builder and both renderers.

GeneratorConfig holds everything that is decided before generation
starts: the timestamp stamped into the outputs, the attribute marking
exported impl blocks, additional named types, and reporting verbosity.
It is never mutated while rendering.
"""

import json
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .. import __version__


TOOL_NAME = 'nearsyn'


@dataclass
class GeneratorConfig:
    """
    Settings for one generation run.

    `extra_types` maps a type name to its TypeScript definition and doc
    lines; such names render by name like the NEAR SDK wrapper types.
    """

    # Stamp
    now: str = ''
    tool_name: str = TOOL_NAME
    version: str = __version__
    repository: str = ''

    # Extraction
    bindgen_attribute: str = 'near_bindgen'
    extra_types: Dict[str, Tuple[str, List[str]]] = field(default_factory=dict)

    # Rendering
    indent_str: str = '    '

    # Reporting
    verbose: bool = False

    def indent(self, level: int = 1) -> str:
        """Return the indentation string for the given level."""
        return self.indent_str * level

    @property
    def stamp(self) -> str:
        """Tool name and version, e.g. `nearsyn v0.1.0`."""
        return f'{self.tool_name} v{self.version}'

    @classmethod
    def load(cls, path: Optional[str] = None, **overrides) -> 'GeneratorConfig':
        """
        Create a config, reading optional settings from a JSON file.

        Recognized keys are `bindgen_attribute`, `repository`, and
        `extra_types` (name -> {"ts": definition, "doc": [lines]}).
        A file that cannot be read or parsed leaves the defaults in place.

        Args:
            path: JSON file to read, or None for defaults only
            **overrides: Field values that take precedence over the file

        Returns:
            A new GeneratorConfig instance
        """
        config = cls()

        if path:
            try:
                with open(path, 'r') as f:
                    data = json.load(f)
                loaded = cls()
                if 'bindgen_attribute' in data:
                    loaded.bindgen_attribute = str(data['bindgen_attribute'])
                if 'repository' in data:
                    loaded.repository = str(data['repository'])
                for name, entry in data.get('extra_types', {}).items():
                    if isinstance(entry, str):
                        loaded.extra_types[name] = (entry, [])
                    else:
                        doc = entry.get('doc', [])
                        if isinstance(doc, str):
                            doc = doc.splitlines()
                        loaded.extra_types[name] = (entry.get('ts', 'string'), list(doc))
                config = loaded
            except (OSError, json.JSONDecodeError, AttributeError, TypeError) as e:
                print(f"Warning: Failed to load config {path}: {e}", file=sys.stderr)

        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)
        return config
