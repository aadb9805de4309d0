"""Static page and asset bodies served by the advisor."""

from settings import APP_NAME, BUILD_ID
from wire import NotFound, Request, RouteResult

ASSET_PREFIX = "/asset/"

INDEX_HTML = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Xenon Advisor</title>
<link rel="stylesheet" href="/asset/style">
</head>
<body>
<main>
  <h1>Xenon Advisor</h1>
  <p class="tagline">Ask a question. Get a tremendous answer.</p>
  <form id="ask-form">
    <input id="q" name="q" maxlength="2000" autocomplete="off" placeholder="Ask anything...">
    <button type="submit">Ask</button>
  </form>
  <div id="reply" aria-live="polite"></div>
  <footer>{APP_NAME} &middot; build {BUILD_ID}</footer>
</main>
<script src="/asset/script"></script>
</body>
</html>
"""

STYLE_CSS = """body { font-family: Georgia, serif; background: #101418; color: #f3f0e8; margin: 0; }
main { max-width: 40rem; margin: 4rem auto; padding: 0 1rem; }
h1 { color: #d4a437; letter-spacing: 0.05em; }
.tagline { color: #9aa4ad; }
form { display: flex; gap: 0.5rem; }
#q { flex: 1; padding: 0.6rem; border: 1px solid #39424b; background: #182028; color: inherit; }
button { padding: 0.6rem 1.2rem; background: #d4a437; border: 0; color: #101418; cursor: pointer; }
#reply { margin-top: 1.5rem; min-height: 3rem; font-size: 1.15rem; }
footer { margin-top: 3rem; font-size: 0.75rem; color: #5f6b75; }
"""

SCRIPT_JS = """(function () {
  var form = document.getElementById("ask-form");
  var input = document.getElementById("q");
  var out = document.getElementById("reply");
  form.addEventListener("submit", function (ev) {
    ev.preventDefault();
    var body = "q=" + encodeURIComponent(input.value);
    fetch("/ask", {
      method: "POST",
      headers: { "Content-Type": "application/x-www-form-urlencoded" },
      body: body
    })
      .then(function (r) { return r.json(); })
      .then(function (data) { out.textContent = data.reply; })
      .catch(function () { out.textContent = "Connection lost. Try again."; });
  });
})();
"""

ASSETS = {
    "style": (STYLE_CSS.encode("utf-8"), "text/css; charset=utf-8"),
    "script": (SCRIPT_JS.encode("utf-8"), "application/javascript; charset=utf-8"),
}


def index(request: Request, settings=None) -> RouteResult:
    return RouteResult(status=200, body=INDEX_HTML.encode("utf-8"))


def asset(request: Request, settings=None) -> RouteResult:
    name = request.path[len(ASSET_PREFIX):].split("/", 1)[0]
    entry = ASSETS.get(name)
    if entry is None:
        raise NotFound(f"unknown asset: {name[:32]}")
    body, content_type = entry
    return RouteResult(status=200, body=body, content_type=content_type)
