from __future__ import annotations

from typing import Any, Dict, List

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the dashboard's JSON API."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def get_current(self) -> Dict[str, Any]:
        return self._get_json("/api/sensors/current")

    def get_changes(self, day: int) -> Dict[str, Any]:
        if day > 0:
            raise typer.BadParameter("Day offset must be 0 or negative.")
        return self._get_json("/api/sensors/changes", params={"day": day})

    def get_export(self) -> List[Dict[str, str]]:
        payload = self._get_json("/api/export")
        lines = payload.get("lines")
        if not isinstance(lines, list):
            raise typer.BadParameter("Unexpected response payload when fetching export.")
        return lines

    def _get_json(self, path: str, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        try:
            response = self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.TransportError as exc:
            typer.secho(
                f"Could not reach {self._config.base_url}: {exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1) from exc
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except ValueError:
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
