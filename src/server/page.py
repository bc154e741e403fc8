"""Minimal built-in page served when no custom index file is configured."""

DEFAULT_INDEX_HTML = b"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>tomatillo</title>
<style>
body { font-family: sans-serif; text-align: center; margin-top: 15vh; }
#clock { font-size: 6rem; font-variant-numeric: tabular-nums; }
#phase { font-size: 1.5rem; color: #555; }
button { font-size: 1rem; margin: 0.25rem; }
</style>
</head>
<body>
<div id="phase">idle</div>
<div id="clock">--:--</div>
<div>
<button data-action="start">start</button>
<button data-action="pause">pause</button>
<button data-action="continue">continue</button>
<button data-action="skip">skip</button>
<button data-action="reset">reset</button>
<button data-action="stop">stop</button>
</div>
<script>
const ws = new WebSocket(`ws://${location.host}/ws`);
const pad = (n) => String(n).padStart(2, "0");
const clock = (ms) => {
  const s = Math.ceil(Math.max(0, ms) / 1000);
  return `${pad(Math.floor(s / 60))}:${pad(s % 60)}`;
};
ws.onmessage = (msg) => {
  const event = JSON.parse(msg.data);
  if (event.type === "pomodoro" || event.type === "countdown") {
    document.getElementById("phase").textContent = event.phase + (event.paused ? " (paused)" : "");
    document.getElementById("clock").textContent = clock(event.remaining_ms);
  }
};
document.querySelectorAll("button").forEach((button) => {
  button.onclick = () => ws.send(JSON.stringify({ type: "command", action: button.dataset.action }));
});
</script>
</body>
</html>
"""
