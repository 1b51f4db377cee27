"""HTML fragment rendering for the comment section."""

from collections.abc import Sequence

from liquid import Environment

from commentwidget.core.modules.comment.models import BODY_MAX_BYTES, NAME_MAX_BYTES, Comment

COMMENT_SECTION_TEMPLATE = """
<div id="comments-wrapper">

  <div id="comments">
    {% for comment in comments %}
      <div class="comment" id="comment-{{ comment.id }}">
        <div class="meta">
          <strong>{{ comment.name }}</strong>
          <span class="timestamp">{{ comment.created }}</span>
        </div>
        <div class="body">{{ comment.body }}</div>
      </div>
    {% else %}
      <p><em>No comments yet.</em></p>
    {% endfor %}
  </div>

  <form method="POST" hx-post="/comments" hx-target="#comments-wrapper" hx-swap="outerHTML">
    <input type="text" name="name" placeholder="Name" required maxlength="{{ name_max }}">
    <textarea name="body" placeholder="Comment..." required maxlength="{{ body_max }}"></textarea>

    <!-- Honeypot -->
    <input type="text" name="website" style="display:none" tabindex="-1" autocomplete="off">

    <button type="submit">Post</button>
  </form>

  <style>
    #comments-wrapper { margin-top: 1rem; }
    .comment { margin-bottom: 1rem; }
    .meta { font-size: 0.85em; opacity: 0.7; }
    .body { margin-top: 0.25rem; white-space: pre-wrap; }
    form { margin-top: 1rem; display: flex; flex-direction: column; gap: 0.5rem; }
    textarea { min-height: 80px; resize: vertical; }
  </style>

</div>
"""

_env = Environment(autoescape=True)
_template = _env.from_string(COMMENT_SECTION_TEMPLATE)


def render_comment_section(comments: Sequence[Comment]) -> str:
    """Render the comment list and submission form as an HTML fragment.

    All comment fields are HTML escaped; body newlines are kept and shown via
    ``white-space: pre-wrap``.
    """
    return _template.render(
        comments=[comment.model_dump() for comment in comments],
        name_max=NAME_MAX_BYTES,
        body_max=BODY_MAX_BYTES,
    )
