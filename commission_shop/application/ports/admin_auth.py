from abc import ABC, abstractmethod


class AdminAuthPort(ABC):
    @abstractmethod
    def is_admin(self, token: str | None) -> bool:
        raise NotImplementedError
