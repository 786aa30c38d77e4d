from __future__ import annotations

from jinja2 import Environment, StrictUndefined

from .model import AnalysisInput

_env = Environment(undefined=StrictUndefined, trim_blocks=True, lstrip_blocks=True, autoescape=False)

ANALYSIS_PROMPT = _env.from_string(
    """You are a careful homeroom-teacher assistant. Analyse the performance data of one student and write an
objective, balanced summary a teacher can use in a parent meeting or on a report card.

Student: {{ student.name }}
Period: {{ period }}

Attendance history:
{% for a in attendance %}
- Date: {{ a.date }}, Status: {{ a.status }}
{% else %}
- No attendance data.
{% endfor %}

Daily rating history (scale 1-5):
{% for r in ratings %}
- Date: {{ r.date }}, Average: {{ r.average }}
{% else %}
- No ratings.
{% endfor %}

Point records (awards / violations):
{% for p in point_records %}
- Date: {{ p.date }}, Type: {{ p.type }}, Points: {{ p.points }}, Description: {{ p.description }}
{% else %}
- No point records.
{% endfor %}

Rating categories:
{% for c in categories %}
- ID: {{ c.id }}, Name: {{ c.name }}
{% endfor %}

Tasks:
1. Attendance: identify patterns such as frequent lateness or absences, with counts when significant.
2. Ratings: describe the trend of the daily averages, the strongest categories and the ones to improve.
3. Points: summarise awards and violations with concrete examples from the descriptions.
4. Combine everything into a coherent, constructive narrative based only on the data.

Start the report with "Performance analysis for {{ student.name }}:".
"""
)


def render_analysis_prompt(payload: AnalysisInput) -> str:
    return ANALYSIS_PROMPT.render(**payload.to_dict())
