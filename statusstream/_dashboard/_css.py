"""CSS styles for the dashboard.

Day categories (nodata, success, failure, partial) are used directly as class
names on squares and status labels.
"""

CSS_STYLES = """
        :root {
            --bg: #f6f8fa;
            --panel: #ffffff;
            --text: #24292f;
            --text-dim: #57606a;
            --border: #d0d7de;
            --success: #2da44e;
            --partial: #d4a72c;
            --failure: #cf222e;
            --nodata: #c6cbd1;
        }

        * { margin: 0; padding: 0; box-sizing: border-box; }

        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif;
            background: var(--bg);
            color: var(--text);
            max-width: 860px;
            margin: 0 auto;
            padding: 24px 16px;
            position: relative;
        }

        header h1 {
            font-size: 1.6rem;
            margin-bottom: 24px;
        }

        h2 {
            font-size: 1rem;
            margin: 12px 0 6px;
        }

        .incidents,
        .statusContainer {
            background: var(--panel);
            border: 1px solid var(--border);
            border-radius: 6px;
            padding: 16px;
            margin-bottom: 16px;
        }

        .incidentReport {
            white-space: pre-wrap;
            font-family: inherit;
            color: var(--text-dim);
        }

        .statusHeader {
            display: flex;
            align-items: baseline;
            gap: 12px;
            margin-bottom: 10px;
        }

        .statusTitle { flex: 1; font-weight: 600; }
        .statusTitle a { color: inherit; text-decoration: none; }
        .statusUptime { color: var(--text-dim); }

        .statusText.success, #tooltipStatus.success { color: var(--success); }
        .statusText.partial, #tooltipStatus.partial { color: var(--partial); }
        .statusText.failure, #tooltipStatus.failure { color: var(--failure); }
        .statusText.nodata, #tooltipStatus.nodata { color: var(--text-dim); }

        .statusStreamContainer {
            display: flex;
            gap: 3px;
        }

        .statusSquare {
            flex: 1;
            height: 32px;
            border-radius: 2px;
            cursor: pointer;
        }

        .statusSquare:hover { opacity: 0.7; }
        .statusSquare.success { background: var(--success); }
        .statusSquare.partial { background: var(--partial); }
        .statusSquare.failure { background: var(--failure); }
        .statusSquare.nodata { background: var(--nodata); }

        #tooltip {
            position: absolute;
            opacity: 0;
            pointer-events: none;
            transition: opacity 0.2s;
            background: var(--panel);
            border: 1px solid var(--border);
            border-radius: 6px;
            padding: 8px 12px;
            min-width: 220px;
            box-shadow: 0 4px 12px rgba(0, 0, 0, 0.12);
        }

        #tooltipDateTime { font-weight: 600; }
        #tooltipDescription { color: var(--text-dim); font-size: 0.85rem; }

        footer {
            color: var(--text-dim);
            font-size: 0.8rem;
            text-align: center;
            margin-top: 24px;
        }
"""
