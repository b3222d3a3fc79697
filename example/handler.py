"""app: serve a small route table over WSGI."""

import json
from wsgiref.simple_server import make_server

from secure_route import Response, Router, StatusCode

app = Router(base_path="/secure-route-app", debug=True)


@app.route("/", name="home")
def home() -> str:
    """Return the homepage."""
    return "Welcome to the homepage!"


@app.route("/users/[i:id]", methods="GET|POST", name="user")
def user(id: str) -> str:
    """Return a user page with a link back to itself."""
    return f"User ID: {id} ({app.generate('user', {'id': id})})"


@app.route("/products/[i:category]?", name="products")
def products(category: str = "") -> Response:
    """Return JSON Object."""
    return Response(
        status_code=StatusCode.OK,
        content_type="application/json",
        body=json.dumps({"category": category or None}),
    )


@app.route("/files/[**:path]")
def files(path: str) -> str:
    """Echo a multi-segment path."""
    return path


@app.route("/archive/[\\d{4}:year]/[\\d{2}:month]?")
def archive(year: str, month: str = "") -> str:
    """Inline regex types."""
    return f"{year}-{month or '*'}"


if __name__ == "__main__":
    with make_server("", 8000, app) as server:
        server.serve_forever()
