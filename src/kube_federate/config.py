"""Configuration models and helpers for kube-federate."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel


class ClusterContext(BaseModel):
    """Connection context used to reach a cluster's discovery endpoints."""

    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    verify_ssl: bool = True


def load_validation(path: str | Path) -> Dict[str, Any]:
    """Read a CRD validation block (e.g. ``openAPIV3Schema``) from a YAML or JSON file."""

    document_path = Path(path)
    data = yaml.safe_load(document_path.read_text())
    if not isinstance(data, dict):
        raise ValueError("Validation file must contain a mapping at the top level.")
    return data
