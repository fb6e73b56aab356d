from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class StateStore(ABC):
    @abstractmethod
    async def load(self, key: str) -> Optional[str]:
        """Ritorna il blob di testo salvato sotto key, oppure None se non esiste."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, key: str, text: str) -> bool:
        """Salva il blob sotto key. Ritorna False se il salvataggio fallisce, senza sollevare."""
        raise NotImplementedError
