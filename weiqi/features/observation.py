from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import torch

from weiqi.core import Stone
from weiqi.session import GameSession

BOARD_CHANNELS = 3  # black stones, white stones, side to move
AUX_VECTOR_SIZE = 4  # side-to-move one-hot (2) + scaled capture counts (2)


def build_board_tensor(session: GameSession) -> np.ndarray:
    """Return board tensor with shape (3, N, N) channel-first."""
    board = session.board
    size = session.board_size
    tensor = np.zeros((BOARD_CHANNELS, size, size), dtype=np.float32)
    tensor[0] = board == Stone.BLACK
    tensor[1] = board == Stone.WHITE
    if session.turn == Stone.BLACK:
        tensor[2] = 1.0
    return tensor


def build_aux_vector(session: GameSession) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[0 if session.turn == Stone.BLACK else 1] = 1.0
    area = float(session.board_size * session.board_size)
    aux[2] = min(session.captures.black / area, 1.0)
    aux[3] = min(session.captures.white / area, 1.0)
    return aux


def state_to_numpy(session: GameSession) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(session), build_aux_vector(session)


def state_to_torch(
    session: GameSession,
    *,
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.float32,
) -> Tuple[torch.Tensor, torch.Tensor]:
    board_np, aux_np = state_to_numpy(session)
    board = torch.from_numpy(board_np).to(device=device, dtype=dtype)
    aux = torch.from_numpy(aux_np).to(device=device, dtype=dtype)
    return board, aux
