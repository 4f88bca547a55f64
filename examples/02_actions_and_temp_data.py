"""
Action controllers with temp data.

Demonstrates:
- Routing to @action methods through the ``action`` path value
- Binding action parameters from route and query values
- Passing a one-shot notice to the next request through temp_data, keyed
  by the session that SessionMiddleware keeps (requires itsdangerous)
- Logging every dispatch with an AfterExecute hook
"""

import logging

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from fastapi_request_controller import AfterExecute, Controller, action, controller_endpoint

logger = logging.getLogger("example")

app = FastAPI(title="Action Controller Example")
app.add_middleware(SessionMiddleware, secret_key="change-me")

TICKETS: dict[str, dict] = {}


class TicketsController(Controller):
    @action
    def index(self):
        return {"tickets": list(TICKETS.values()), "notice": self.temp_data.get("notice")}

    @action
    def create(self, title: str = "Untitled"):
        ticket_id = str(len(TICKETS) + 1)
        TICKETS[ticket_id] = {"id": ticket_id, "title": title}
        self.temp_data["notice"] = f"Ticket {ticket_id} created"
        return RedirectResponse("/tickets/index", status_code=303)

    @action(name="show")
    async def show_ticket(self, ticket_id: str):
        return TICKETS.get(ticket_id, {"error": "not found"})


async def log_dispatch(controller, error):
    logger.info("%s finished (error=%r)", type(controller).__name__, error)


hooks = [AfterExecute(log_dispatch)]
app.add_api_route(
    "/tickets/{action}",
    controller_endpoint(TicketsController, hooks=hooks),
    methods=["GET", "POST"],
)
app.add_api_route(
    "/tickets/show/{ticket_id}",
    controller_endpoint(TicketsController, hooks=hooks, action="show"),
)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)

    # Test with:
    # curl -c jar -b jar -X POST "http://localhost:8000/tickets/create?title=Printer+jam"
    # curl -c jar -b jar http://localhost:8000/tickets/index
    # curl http://localhost:8000/tickets/show/1
