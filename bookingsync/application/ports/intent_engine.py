from abc import ABC, abstractmethod

from bookingsync.domain.entities.interpretation import Interpretation


class IntentEnginePort(ABC):
    @abstractmethod
    def interpret(self, utterance: str) -> Interpretation:
        """
        Turn a user utterance into a reply and an optional partial booking update.

        Requirements:
        - Must always return a non-empty reply
        - Any update must only contain values inside the booking field domains
        - Must not mutate any booking state itself
        """
        raise NotImplementedError
