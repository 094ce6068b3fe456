"""Abstract interface for inference back ends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence


class Inference(ABC):
    """A network that is initialised with blob shapes and then run."""

    def __init__(self) -> None:
        self.max_batch_size: int = 1
        self.gpu_id: int = 0
        self.proto_file: str = ""
        self.net_input_names: list[str] = []
        self.net_output_names: list[str] = []

    @abstractmethod
    def init(self, shapes: Mapping[str, Sequence[int]]) -> bool:
        """Prepare the network for the given blob shapes."""

    @abstractmethod
    def infer(self) -> None:
        """Run the network once."""

    @abstractmethod
    def get_blob(self, name: str) -> Any:
        """The blob called ``name``, or None if there is none."""

    def set_model_info(self, proto_file: str, net_input_names: Sequence[str],
                       net_output_names: Sequence[str]) -> None:
        self.proto_file = proto_file
        self.net_input_names = list(net_input_names)
        self.net_output_names = list(net_output_names)