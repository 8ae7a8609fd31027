"""Landing page."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

LANDING_PAGE = """<html>
<head><title>dump1090 Exporter</title></head>
<body>
<h1>dump1090 Exporter</h1>
<p><a href="/metrics?target=localhost:8080">/metrics?target=&lt;host:port&gt;</a></p>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse, summary="Landing page")
def landing_page() -> str:
    return LANDING_PAGE
