"""
Base class of the per-timestep layer structures.

A layer structure is one timestep of one layer. It owns its output array and
any intermediate gate arrays, shares its input array with the output array of
the layer below, and computes against a `LayerParameters` object that belongs
to the model and is never mutated here.

Forward / backward protocol
---------------------------
- `forward(window, use_dropout)` reads `input_array.values` and writes
  `output_array.values`.
- `forward_with_contributions(contributions, ...)` does the same and records
  per-source contributions into a zeroed parameters object of the same type.
- `backward(output_errors, params_errors, propagate_to_input, window)` stores
  the output errors on the output array, overwrites `params_errors` with the
  gradients of this timestep, writes `input_array.errors` when asked to, and
  keeps `recurrent_errors`, the gradient destined for the previous timestep's
  output of the same layer.

Design notes
------------
- Subclasses implement `_forward(x, window, contributions)` and
  `_backward(grad_output, params_errors, window)`, where
  `grad_output` already includes the recurrent errors coming from the next
  timestep.
- Dropout never mutates the shared input array: the masked input is kept
  locally and reused by backward, which multiplies the input errors by the
  same mask.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Type

import numpy as np

from ..arrays._augmented_array import AugmentedArray
from ..parameters._layer_parameters import LayerParameters
from ._layer_configuration import LayerConnection
from ...domain._activation import IActivationFunction
from ...domain._errors import ShapeMismatchError
from ...domain._layer import ILayerContextWindow


class LayerStructure(ABC):
    """
    One timestep of a layer.

    Parameters
    ----------
    input_array : AugmentedArray
        Input of the layer, shared with the output of the layer below.
    output_array : AugmentedArray
        Output of the layer, shared with the input of the layer above.
    params : LayerParameters
        Shared parameters of this layer; must match `PARAMS_TYPE`.
    activation_function : IActivationFunction, optional
        Activation of the layer.
    dropout : float
        Dropout probability applied to the input when `use_dropout` is set.
    rng : numpy.random.Generator, optional
        Random source of the dropout masks.
    """

    CONNECTION: ClassVar[LayerConnection]
    PARAMS_TYPE: ClassVar[Type[LayerParameters]]

    def __init__(
        self,
        input_array: AugmentedArray,
        output_array: AugmentedArray,
        params: LayerParameters,
        activation_function: Optional[IActivationFunction] = None,
        dropout: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if not isinstance(params, self.PARAMS_TYPE):
            raise TypeError(
                f"{type(self).__name__} requires {self.PARAMS_TYPE.__name__}, "
                f"got {type(params).__name__}."
            )
        if input_array.size != params.input_size:
            raise ShapeMismatchError(
                (params.input_size,), input_array.shape, "input array"
            )
        if output_array.size != params.output_size:
            raise ShapeMismatchError(
                (params.output_size,), output_array.shape, "output array"
            )
        if not (0.0 <= dropout < 1.0):
            raise ValueError(f"dropout must be in [0, 1), got {dropout}")

        self.input_array = input_array
        self.output_array = output_array
        self.params = params
        self.activation_function = activation_function
        self.dropout = float(dropout)
        self._rng = rng if rng is not None else np.random.default_rng()

        self.recurrent_errors: Optional[np.ndarray] = None
        self._dropout_mask: Optional[np.ndarray] = None
        self._x: Optional[np.ndarray] = None

    # ------------------------------------------------------------------ forward

    def forward(
        self, window: Optional[ILayerContextWindow] = None, use_dropout: bool = False
    ) -> None:
        """Forward the input array to the output array."""
        self._forward(self._prepare_input(use_dropout), window, None)

    def forward_with_contributions(
        self,
        contributions: LayerParameters,
        window: Optional[ILayerContextWindow] = None,
        use_dropout: bool = False,
    ) -> None:
        """
        Forward the input array to the output array, saving the contribution of
        each weight into `contributions`.
        """
        self.params.check_compatible(contributions)
        self._forward(self._prepare_input(use_dropout), window, contributions)

    def _prepare_input(self, use_dropout: bool) -> np.ndarray:
        x = self.input_array.values
        if use_dropout and self.dropout > 0.0:
            keep_prob = 1.0 - self.dropout
            r = self._rng.random(x.shape)
            self._dropout_mask = (r < keep_prob) / keep_prob
            x = x * self._dropout_mask
        else:
            self._dropout_mask = None
            x = x.copy()
        self._x = x
        return x

    @property
    def layer_input(self) -> np.ndarray:
        """The input used by the last forward (after dropout)."""
        if self._x is None:
            raise RuntimeError(f"{type(self).__name__} has not been forwarded yet.")
        return self._x

    # ----------------------------------------------------------------- backward

    def backward(
        self,
        output_errors,
        params_errors: LayerParameters,
        propagate_to_input: bool = False,
        window: Optional[ILayerContextWindow] = None,
    ) -> None:
        """
        Backward the output errors through this timestep.

        Parameters
        ----------
        output_errors : array_like
            Gradient of the loss with respect to `output_array.values`.
        params_errors : LayerParameters
            Buffer of the same type as `params`, overwritten with the
            gradients of this timestep.
        propagate_to_input : bool
            Whether to write `input_array.errors`.
        window : ILayerContextWindow, optional
            Access to the adjacent timesteps of this layer.

        Raises
        ------
        ShapeMismatchError
            If `output_errors` does not match the output size.
        TypeError
            If `params_errors` is not of the parameters type of this layer.
        """
        if not isinstance(params_errors, self.PARAMS_TYPE):
            raise TypeError(
                f"params_errors must be {self.PARAMS_TYPE.__name__}, "
                f"got {type(params_errors).__name__}."
            )
        self.params.check_compatible(params_errors)
        if self._x is None:
            raise RuntimeError(f"{type(self).__name__} has not been forwarded yet.")

        self.output_array.assign_errors(output_errors)

        grad_output = self.output_array.errors.copy()
        next_layer = window.next_state_layer() if window is not None else None
        if next_layer is not None and next_layer.recurrent_errors is not None:
            grad_output += next_layer.recurrent_errors

        input_errors = self._backward(grad_output, params_errors, window)

        if propagate_to_input:
            if self._dropout_mask is not None:
                input_errors = input_errors * self._dropout_mask
            self.input_array.assign_errors(input_errors)

    @staticmethod
    def _prev_layer(
        window: Optional[ILayerContextWindow],
    ) -> Optional["LayerStructure"]:
        return window.prev_state_layer() if window is not None else None

    @abstractmethod
    def _forward(
        self,
        x: np.ndarray,
        window: Optional[ILayerContextWindow],
        contributions: Optional[LayerParameters],
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def _backward(
        self,
        grad_output: np.ndarray,
        params_errors: LayerParameters,
        window: Optional[ILayerContextWindow],
    ) -> np.ndarray:
        """
        Write the parameter gradients and `recurrent_errors`; return the
        gradient with respect to the (masked) input.
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(input_size={self.params.input_size}, "
            f"output_size={self.params.output_size})"
        )
