"""
Basic usage example of fastapi-request-controller.

Demonstrates:
- Subclassing ControllerBase with an execute_core hook
- Mounting a controller on a FastAPI route with controller_endpoint
- Reading input through the value provider
"""

from fastapi import FastAPI

from fastapi_request_controller import ControllerBase, controller_endpoint

app = FastAPI(title="Basic Controller Example")


class GreetingController(ControllerBase):
    """Greets the caller by the ``name`` query or path value."""

    async def execute_core(self):
        name = self.value_provider.get_value("name")
        self.view_bag.greeting = f"Hello, {name.raw_value if name else 'World'}!"
        return dict(self.view_data)


app.add_api_route("/hello", controller_endpoint(GreetingController))
app.add_api_route("/hello/{name}", controller_endpoint(GreetingController))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

    # Test with:
    # curl http://localhost:8000/hello
    # curl http://localhost:8000/hello?name=Ada
    # curl http://localhost:8000/hello/Grace
