"""
GraphiQL - in-browser GraphQL IDE.

Renders a standalone HTML page loading GraphiQL from a CDN.

Usage:
    from graphql_http.graphiql import render_graphiql

    html = render_graphiql(query="{ hello }")
"""

from __future__ import annotations

import html
import json
from typing import Any, Optional

from ..settings import get_settings


CDN_URL = "https://unpkg.com"
REACT_VERSION = "18.2.0"


def safe_serialize(value: Any) -> str:
    """
    Serialize a value as a JavaScript literal safe to embed in a <script>.

    None becomes ``undefined`` so GraphiQL falls back to its defaults.
    """
    if value is None:
        return "undefined"
    return json.dumps(value).replace("/", "\\/")


def render_graphiql(
    *,
    query: Optional[str] = None,
    variables: Optional[dict[str, Any]] = None,
    operation_name: Optional[str] = None,
    result: Optional[dict[str, Any]] = None,
    version: Optional[str] = None,
    title: str = "GraphiQL",
) -> str:
    """
    Get GraphiQL HTML preloaded with the request state.

    Args:
        query: Query shown in the editor
        variables: Variables shown in the variables pane
        operation_name: Operation selected in the editor
        result: Response shown in the result pane
        version: GraphiQL package version on the CDN
        title: Page title

    Returns:
        HTML string
    """
    version = version or get_settings().graphiql_version
    variables_string = json.dumps(variables, indent=2) if variables is not None else None
    result_string = json.dumps(result, indent=2, default=str) if result is not None else None

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>{html.escape(title)}</title>
  <meta name="robots" content="noindex" />
  <meta name="referrer" content="origin" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <style>
    body {{
      margin: 0;
      overflow: hidden;
    }}
    #graphiql {{
      height: 100vh;
    }}
  </style>
  <link href="{CDN_URL}/graphiql@{version}/graphiql.min.css" rel="stylesheet" />
  <script crossorigin src="{CDN_URL}/react@{REACT_VERSION}/umd/react.production.min.js"></script>
  <script crossorigin src="{CDN_URL}/react-dom@{REACT_VERSION}/umd/react-dom.production.min.js"></script>
  <script crossorigin src="{CDN_URL}/graphiql@{version}/graphiql.min.js"></script>
</head>
<body>
  <div id="graphiql">Loading...</div>
  <script>
    // Collect the URL parameters
    var parameters = {{}};
    window.location.search.substr(1).split('&').forEach(function (entry) {{
      var eq = entry.indexOf('=');
      if (eq >= 0) {{
        parameters[decodeURIComponent(entry.slice(0, eq))] =
          decodeURIComponent(entry.slice(eq + 1));
      }}
    }});

    // Produce a Location query string from a parameter object.
    function locationQuery(params) {{
      return '?' + Object.keys(params).filter(function (key) {{
        return Boolean(params[key]);
      }}).map(function (key) {{
        return encodeURIComponent(key) + '=' + encodeURIComponent(params[key]);
      }}).join('&');
    }}

    // Derive a fetch URL from the current URL, sans the GraphQL parameters.
    var graphqlParamNames = {{
      query: true,
      variables: true,
      operationName: true
    }};

    var otherParams = {{}};
    for (var k in parameters) {{
      if (parameters.hasOwnProperty(k) && graphqlParamNames[k] !== true) {{
        otherParams[k] = parameters[k];
      }}
    }}
    otherParams.raw = 'true';
    var fetchURL = locationQuery(otherParams);

    // Defines a GraphQL fetcher using the fetch API.
    function graphQLFetcher(graphQLParams) {{
      return fetch(fetchURL, {{
        method: 'post',
        headers: {{
          'Accept': 'application/json',
          'Content-Type': 'application/json'
        }},
        body: JSON.stringify(graphQLParams),
        credentials: 'include',
      }}).then(function (response) {{
        return response.text();
      }}).then(function (responseBody) {{
        try {{
          return JSON.parse(responseBody);
        }} catch (error) {{
          return responseBody;
        }}
      }});
    }}

    // When the query and variables string is edited, update the URL bar so
    // that it can be easily shared.
    function onEditQuery(newQuery) {{
      parameters.query = newQuery;
      updateURL();
    }}

    function onEditVariables(newVariables) {{
      parameters.variables = newVariables;
      updateURL();
    }}

    function onEditOperationName(newOperationName) {{
      parameters.operationName = newOperationName;
      updateURL();
    }}

    function updateURL() {{
      history.replaceState(null, null, locationQuery(parameters));
    }}

    var root = ReactDOM.createRoot(document.getElementById('graphiql'));
    root.render(
      React.createElement(GraphiQL, {{
        fetcher: graphQLFetcher,
        onEditQuery: onEditQuery,
        onEditVariables: onEditVariables,
        onEditOperationName: onEditOperationName,
        query: {safe_serialize(query)},
        response: {safe_serialize(result_string)},
        variables: {safe_serialize(variables_string)},
        operationName: {safe_serialize(operation_name)},
      }})
    );
  </script>
</body>
</html>"""


__all__ = [
    "render_graphiql",
    "safe_serialize",
    "CDN_URL",
]
