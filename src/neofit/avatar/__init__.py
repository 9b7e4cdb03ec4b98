"""Parametric avatar scaling."""

from __future__ import annotations

from neofit.avatar.body_scale import BodyScale, body_scale_for, compute_body_scale

__all__ = ["BodyScale", "body_scale_for", "compute_body_scale"]
