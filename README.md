# corsware

Cross-origin resource sharing (CORS) middleware for any WSGI application.

The middleware handles requests as follows:

- A request with no `Origin` header passes through unchanged.
- A request whose origin is `http://<Host>` or `https://<Host>` (its own
  host) also passes through unchanged.
- A request from an origin that is not allowed is answered at once with
  `403 Forbidden` and an empty body.
- An allowed preflight (`OPTIONS`) request is answered at once with
  `204 No Content` and the preflight headers.
- Any other allowed request goes on to the application. The CORS headers are
  added to its response. A header that the application sets itself is kept in
  place of the CORS header with the same name.

## Installation

```
pip install corsware
```

## Quick start

This allows every origin, with the default methods and headers and a 12-hour
max age:

```python
from corsware.cors import default

application = default(application)
```

## Custom configuration

```python
from datetime import timedelta

from corsware.config import Config
from corsware.cors import new

config = Config(
    allow_origins=["https://example.com", "https://*.example.com"],
    allow_wildcard=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
    expose_headers=["X-Request-Id"],
    allow_credentials=True,
    max_age=timedelta(hours=1),
)
config.add_allow_methods("PUT", "DELETE")

application = new(application, config)
```

`default_config()` returns a starting point that has common methods
(`GET, POST, PUT, PATCH, DELETE, HEAD, OPTIONS`), common headers and a
12-hour max age. You still have to choose the origins yourself.

The methods `add_allow_methods`, `add_allow_headers` and `add_expose_headers`
append values to the matching lists.

### Options (`corsware.config.Config`)

| Field | Meaning |
|---|---|
| `allow_all_origins` | Allow any origin and send `Access-Control-Allow-Origin: *`. |
| `allow_origins` | Exact origins to allow. A `"*"` entry allows all origins. |
| `allow_origin_func` | A callable `origin -> bool`. It is consulted when neither the list nor a wildcard rule matches. |
| `allow_methods` | Methods sent in preflight responses. They are trimmed, deduplicated and upper-cased. |
| `allow_headers` | Request headers sent in preflight responses. They are written in canonical form, for example `X-User`. |
| `expose_headers` | Response headers that the browser may expose to scripts. |
| `allow_credentials` | Send `Access-Control-Allow-Credentials: true`. |
| `max_age` | How long a preflight result may be cached, as a `timedelta` or as seconds. |
| `allow_wildcard` | Allow one `*` in an origin, such as `https://*.example.com` or `*.example.org`. |
| `allow_browser_extensions` | Accept `chrome-extension://`, `safari-extension://`, `moz-extension://` and `ms-browser-extension://` origins. |
| `allow_web_sockets` | Accept `ws://` and `wss://` origins. |
| `allow_files` | Accept `file://` origins. Use this with care. |

When origins are restricted, responses carry `Vary: Origin` and echo the
request's origin in `Access-Control-Allow-Origin`.

Contradictory settings raise `ConfigError` (a `ValueError`) when the
middleware is built. The following are errors:

- `allow_all_origins` together with an origin list or an origin function.
- No origins at all.
- An origin that has no `*` and no permitted scheme.
- With wildcards enabled, an origin that has more than one `*`.

Note that a trailing `*` also drops the character before it: the rule
`https://api.*` matches any origin that starts with `https://api`.

## Without WSGI

`corsware.cors.Cors(config).evaluate(method, origin, host)` returns a
`CorsDecision` with these members:

- `headers`: the headers to add.
- `status`: `403`, `204` or `None`.
- `aborted`: true when the request must be answered without calling the
  application.

You can use it from any framework. `Cors.validate_origin(origin)` checks a
single origin.

## What it does not do

corsware is a WSGI middleware and a decision helper only. It provides no ASGI
wrapper, no server and no command-line tool.