"""
Utterance processor stage enumeration.

Rules:
- Values only. No behavior.
- Transitions are driven exclusively by UtteranceProcessor.run().
"""

from __future__ import annotations

from enum import Enum


class ProcessorStage(str, Enum):
    """
    Stages of one end-to-end processing pass.

    IDLE -> ENCODING -> TRANSCRIBING -> GENERATING -> SYNTHESIZING -> EMITTING -> IDLE
    Any non-IDLE stage may move to FAILED, which always returns to IDLE.
    """

    IDLE = "idle"
    ENCODING = "encoding"
    TRANSCRIBING = "transcribing"
    GENERATING = "generating"
    SYNTHESIZING = "synthesizing"
    EMITTING = "emitting"
    FAILED = "failed"
