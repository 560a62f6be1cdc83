"""JavaScript for the day-square tooltip.

Each square carries its date, status and description as data attributes,
so the script only positions the shared tooltip element and fills it in.
"""

JS_TOOLTIP = """
        const TOOLTIP_HIDE_DELAY_MS = 1000;
        let tooltipTimeout = null;

        function showTooltip(element) {
            clearTimeout(tooltipTimeout);
            const toolTipDiv = document.getElementById('tooltip');

            document.getElementById('tooltipDateTime').innerText = element.dataset.date;
            document.getElementById('tooltipDescription').innerText = element.dataset.description;

            const statusDiv = document.getElementById('tooltipStatus');
            statusDiv.innerText = element.dataset.status;
            statusDiv.className = element.dataset.color;

            // 10px below the square, horizontally centered on it
            toolTipDiv.style.top = (element.offsetTop + element.offsetHeight + 10) + 'px';
            toolTipDiv.style.left =
                (element.offsetLeft + element.offsetWidth / 2 - toolTipDiv.offsetWidth / 2) + 'px';
            toolTipDiv.style.opacity = '1';
        }

        function hideTooltip() {
            tooltipTimeout = setTimeout(() => {
                document.getElementById('tooltip').style.opacity = '0';
            }, TOOLTIP_HIDE_DELAY_MS);
        }

        document.querySelectorAll('.statusSquare').forEach((square) => {
            const show = () => showTooltip(square);
            square.addEventListener('mouseover', show);
            square.addEventListener('mousedown', show);
            square.addEventListener('mouseout', hideTooltip);
        });
"""
