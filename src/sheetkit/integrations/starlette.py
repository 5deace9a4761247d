"""Server-side style extraction for Starlette applications."""
from typing import Any, Dict, List, Optional

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from sheetkit.core.registry import SheetsRegistry
from sheetkit.runtime.context import StyleContext, style_provider


def inject_styles(html: str, registry: SheetsRegistry) -> str:
    """Insert the registry's <style> block before </head>, or prepend it."""
    styles = registry.render()
    if not styles:
        return html
    if "</head>" in html:
        return html.replace("</head>", f"{styles}</head>", 1)
    return f"{styles}{html}"


class StylesMiddleware:
    """
    Renders each HTTP request inside a fresh server-side style context.

    Sheets used while handling the request are collected in a registry of
    its own and written into HTML responses.
    """

    def __init__(self, app: ASGIApp, **context_options: Any):
        self.app = app
        self.context_options = context_options

    def create_context(self) -> StyleContext:
        return StyleContext(registry=SheetsRegistry(), is_ssr=True, **self.context_options)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        context = self.create_context()
        scope.setdefault("state", {})["style_context"] = context

        start: Optional[Message] = None
        chunks: List[bytes] = []
        is_html = False

        async def send_wrapper(message: Message) -> None:
            nonlocal start, is_html
            if message["type"] == "http.response.start":
                headers = MutableHeaders(raw=list(message.get("headers", [])))
                is_html = headers.get("content-type", "").startswith("text/html")
                if not is_html:
                    await send(message)
                else:
                    start = message
                return

            if message["type"] != "http.response.body" or not is_html:
                await send(message)
                return

            chunks.append(message.get("body", b""))
            if message.get("more_body", False):
                return

            body = inject_styles(b"".join(chunks).decode("utf-8"), context.registry).encode("utf-8")
            response_start: Message = start or {}
            headers = MutableHeaders(raw=list(response_start.get("headers", [])))
            headers["content-length"] = str(len(body))
            await send({**response_start, "headers": headers.raw})
            await send({"type": "http.response.body", "body": body, "more_body": False})

        with style_provider(context):
            await self.app(scope, receive, send_wrapper)


def get_request_context(scope: Dict[str, Any]) -> Optional[StyleContext]:
    """The style context :class:`StylesMiddleware` installed for a request."""
    return scope.get("state", {}).get("style_context")
