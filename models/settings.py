"""Provider capability descriptor advertised to the host application."""
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ProviderSettings:
    supports_multi_language: bool = True
    supports_multi_scanlator: bool = True

    def to_dict(self) -> Dict[str, bool]:
        return {
            'supportsMultiLanguage': self.supports_multi_language,
            'supportsMultiScanlator': self.supports_multi_scanlator,
        }
