"""Translator widget page served at the root path.

The page only relays SpeechRecognition callbacks and clicks to /ws and
renders whatever state the server pushes back.
"""

from lingo_live.domain.languages import LanguageCode


def _language_options() -> str:
    return "".join(
        f'<option value="{entry.value.code}">{entry.value.name}</option>'
        for entry in LanguageCode
    )


_WIDGET_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Real-Time AI Translator</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem auto;
             max-width: 56rem; padding: 0 1rem; }
      h1 { text-align: center; margin-bottom: 0.25rem; }
      .sub { text-align: center; color: #666; margin-top: 0; }
      .langs { display: grid; grid-template-columns: 1fr auto 1fr; gap: 1rem;
               align-items: end; }
      select { width: 100%; padding: 0.4rem; }
      .toggle { display: block; margin: 1.5rem auto; padding: 0.8rem 2rem;
                border-radius: 999px; border: 0; font-size: 1.1rem;
                background: #2563eb; color: #fff; cursor: pointer; }
      .toggle.active { background: #dc2626; }
      .panes { display: grid; grid-template-columns: 1fr 1fr; gap: 1.5rem; }
      .pane { border: 1px solid #ddd; border-radius: 0.5rem; padding: 1rem;
              min-height: 150px; }
      #status { text-align: center; color: #666; font-style: italic;
                margin: 1rem 0; }
      #history { border: 1px solid #ddd; border-radius: 0.5rem; padding: 1rem;
                 height: 16rem; overflow: auto; }
      .item { border: 1px solid #eee; border-radius: 0.5rem; padding: 0.6rem;
              margin-bottom: 0.6rem; }
      .meta { font-size: 0.8rem; color: #666; }
      #notices { position: fixed; right: 1rem; bottom: 1rem; }
      .notice { background: #dc2626; color: #fff; padding: 0.6rem 1rem;
                border-radius: 0.5rem; margin-top: 0.5rem; max-width: 22rem; }
      footer { text-align: center; font-size: 0.8rem; color: #666;
               margin-top: 1rem; }
    </style>
  </head>
  <body>
    <h1>Real-Time AI Translator</h1>
    <p class="sub">Speak into your microphone and see the translation instantly.</p>
    <div class="langs">
      <label>From<select id="source">__OPTIONS__</select></label>
      <span>&#8644;</span>
      <label>To<select id="target">__OPTIONS__</select></label>
    </div>
    <button id="toggle" class="toggle">Start Translating</button>
    <div class="panes">
      <div class="pane"><h3>Original Text</h3><p id="original"></p></div>
      <div class="pane"><h3>Translated Text</h3><p id="translated"></p></div>
    </div>
    <div id="status">Ready to translate.</div>
    <h3>Translation History</h3>
    <div id="history"></div>
    <footer>User ID: <code id="user">Not signed in</code></footer>
    <div id="notices"></div>
    <script>
      const Recognition = window.SpeechRecognition || window.webkitSpeechRecognition;
      const scheme = location.protocol === 'https:' ? 'wss://' : 'ws://';
      const socket = new WebSocket(scheme + location.host + '/ws');
      const $ = (id) => document.getElementById(id);
      let recognition = null;

      function send(message) { socket.send(JSON.stringify(message)); }

      function sendLanguages() {
        send({ type: 'languages', source: $('source').value, target: $('target').value });
      }

      function startCapture(config) {
        const current = new Recognition();
        recognition = current;
        current.lang = config.lang;
        current.continuous = config.continuous;
        current.interimResults = config.interimResults;
        current.onstart = () => send({ type: 'capture.started' });
        current.onend = () => {
          if (recognition === current) recognition = null;
          send({ type: 'capture.ended' });
        };
        current.onerror = (event) => send({ type: 'capture.error', error: event.error });
        current.onresult = (event) => {
          const results = [];
          for (let i = 0; i < event.results.length; ++i) {
            results.push({ transcript: event.results[i][0].transcript,
                           isFinal: event.results[i].isFinal });
          }
          send({ type: 'capture.result', resultIndex: event.resultIndex, results });
        };
        current.start();
      }

      function render(state) {
        $('original').textContent = state.originalText;
        $('translated').textContent = state.translatedText;
        $('status').textContent = state.status;
        $('user').textContent = state.userId || 'Not signed in';
        $('source').value = state.sourceLanguage;
        $('target').value = state.targetLanguage;
        $('source').disabled = $('target').disabled = state.isCapturing;
        $('toggle').textContent = state.isCapturing ? 'Stop Translating' : 'Start Translating';
        $('toggle').classList.toggle('active', state.isCapturing);
        const history = $('history');
        history.replaceChildren();
        if (!state.history.length) {
          history.textContent = 'Your saved translations will appear here.';
          return;
        }
        for (const item of state.history) {
          const node = document.createElement('div');
          node.className = 'item';
          const direction = document.createElement('div');
          direction.className = 'meta';
          direction.textContent = item.direction;
          const original = document.createElement('div');
          original.textContent = '"' + item.originalText + '"';
          const translated = document.createElement('strong');
          translated.textContent = '"' + item.translatedText + '"';
          const created = document.createElement('div');
          created.className = 'meta';
          created.textContent = new Date(item.createdAt).toLocaleString();
          node.append(direction, original, translated, created);
          history.append(node);
        }
      }

      function showNotice(notice) {
        const node = document.createElement('div');
        node.className = 'notice';
        node.textContent = notice.title + ': ' + notice.description;
        $('notices').append(node);
        setTimeout(() => node.remove(), 5000);
      }

      socket.onopen = () => {
        send({ type: 'hello', speechSupported: Boolean(Recognition) });
      };
      socket.onmessage = (event) => {
        const message = JSON.parse(event.data);
        if (message.type === 'state') render(message);
        else if (message.type === 'notice') showNotice(message);
        else if (message.type === 'capture.start') startCapture(message.config);
        else if (message.type === 'capture.stop' && recognition) recognition.stop();
      };
      $('toggle').onclick = () => send({ type: 'toggle' });
      $('source').onchange = sendLanguages;
      $('target').onchange = sendLanguages;
    </script>
  </body>
</html>
"""

WIDGET_HTML = _WIDGET_TEMPLATE.replace("__OPTIONS__", _language_options())
