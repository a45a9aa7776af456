#!/usr/bin/env python3
# src/profile_mcp_server/widgets.py
"""
HTML profile card.

A single self-contained page (inline CSS, no scripts) suitable for embedding
as a ``text/html`` resource. Every value taken from the profile is escaped.
"""

from datetime import date
from html import escape

from .profiles import ProfileRecord

_STYLE = """
* { box-sizing: border-box; margin: 0; padding: 0; }
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
       background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); min-height: 100vh; padding: 20px; }
.profile-container { max-width: 800px; margin: 0 auto; background: white; border-radius: 24px;
                     box-shadow: 0 20px 40px rgba(0,0,0,0.15); overflow: hidden; }
.profile-header { background: linear-gradient(135deg, #4f46e5 0%, #7c3aed 100%); padding: 40px;
                  text-align: center; color: white; }
.avatar { width: 120px; height: 120px; border-radius: 50%; border: 4px solid rgba(255,255,255,0.3);
          margin: 0 auto 20px; background-size: cover; background-position: center; }
.name { font-size: 2.5rem; font-weight: 700; margin-bottom: 10px; }
.role { font-size: 1.3rem; opacity: 0.9; font-weight: 300; }
.profile-content { padding: 40px; }
.info-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(250px, 1fr)); gap: 30px; margin-bottom: 40px; }
.info-card { background: #f8faff; padding: 25px; border-radius: 15px; border-left: 4px solid #4f46e5; }
.info-label { font-size: 0.9rem; color: #64748b; margin-bottom: 8px; text-transform: uppercase; font-weight: 600; }
.info-value { font-size: 1.1rem; color: #1e293b; font-weight: 500; }
.section-title { font-size: 1.8rem; color: #1e293b; margin: 30px 0 20px; font-weight: 700; }
.skills-grid { display: flex; flex-wrap: wrap; gap: 12px; }
.skill-tag { background: linear-gradient(135deg, #4f46e5, #7c3aed); color: white; padding: 10px 18px;
             border-radius: 25px; font-size: 0.9rem; }
.projects-list { display: grid; gap: 20px; }
.project-card { border: 2px solid #e2e8f0; border-radius: 15px; padding: 25px; }
.project-header { display: flex; justify-content: space-between; align-items: center; }
.project-name { font-size: 1.2rem; font-weight: 600; color: #1e293b; }
.project-status { padding: 6px 12px; border-radius: 20px; font-size: 0.8rem; font-weight: 600; text-transform: uppercase; }
.status-completed { background: #dcfce7; color: #166534; }
.status-in-progress { background: #dbeafe; color: #1e40af; }
.status-planning { background: #fef3c7; color: #92400e; }
.progress-bar { width: 100%; height: 10px; background: #e2e8f0; border-radius: 5px; overflow: hidden; margin-top: 15px; }
.progress-fill { height: 100%; background: linear-gradient(90deg, #4f46e5, #7c3aed); }
.progress-text { text-align: right; margin-top: 8px; font-size: 0.9rem; color: #64748b; }
.stats-bar { display: flex; justify-content: space-around; padding: 20px; background: #f8fafc; border-radius: 12px; margin-top: 30px; }
.stat-item { text-align: center; }
.stat-number { font-size: 2rem; font-weight: 700; color: #4f46e5; }
.stat-label { font-size: 0.9rem; color: #64748b; margin-top: 5px; }
"""


def format_join_date(value: date) -> str:
    """``2021-08-15`` -> ``August 15, 2021``."""
    return f"{value:%B} {value.day}, {value.year}"


def average_completion(profile: ProfileRecord) -> int:
    if not profile.projects:
        return 0
    return round(sum(p.completion for p in profile.projects) / len(profile.projects))


def _status_class(status: str) -> str:
    return "status-" + "-".join(status.lower().split())


def _info_card(label: str, value: str) -> str:
    return (
        '<div class="info-card">'
        f'<div class="info-label">{escape(label)}</div>'
        f'<div class="info-value">{escape(value)}</div>'
        "</div>"
    )


def _project_card(name: str, status: str, completion: int) -> str:
    return (
        '<div class="project-card">'
        '<div class="project-header">'
        f'<div class="project-name">{escape(name)}</div>'
        f'<div class="project-status {_status_class(status)}">{escape(status)}</div>'
        "</div>"
        f'<div class="progress-bar"><div class="progress-fill" style="width: {completion}%"></div></div>'
        f'<div class="progress-text">{completion}% Complete</div>'
        "</div>"
    )


def render_profile_html(profile: ProfileRecord) -> str:
    """Render a complete HTML document for one profile."""
    info_cards = "".join(
        [
            _info_card("Email", profile.email),
            _info_card("Department", profile.department),
            _info_card("Join Date", format_join_date(profile.join_date)),
            _info_card("Employee ID", profile.id),
        ]
    )
    skills = "".join(f'<span class="skill-tag">{escape(skill)}</span>' for skill in profile.skills)
    projects = "".join(_project_card(p.name, p.status, p.completion) for p in profile.projects)

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Employee Profile - {escape(profile.name)}</title>
<style>{_STYLE}</style>
</head>
<body>
<div class="profile-container">
<div class="profile-header">
<div class="avatar" style="background-image: url('{escape(profile.avatar, quote=True)}')"></div>
<h1 class="name">{escape(profile.name)}</h1>
<p class="role">{escape(profile.role)}</p>
</div>
<div class="profile-content">
<div class="info-grid">{info_cards}</div>
<h2 class="section-title">Skills &amp; Expertise</h2>
<div class="skills-grid">{skills}</div>
<h2 class="section-title">Current Projects</h2>
<div class="projects-list">{projects}</div>
<div class="stats-bar">
<div class="stat-item"><div class="stat-number">{len(profile.projects)}</div><div class="stat-label">Projects</div></div>
<div class="stat-item"><div class="stat-number">{len(profile.skills)}</div><div class="stat-label">Skills</div></div>
<div class="stat-item"><div class="stat-number">{average_completion(profile)}%</div><div class="stat-label">Avg Progress</div></div>
</div>
</div>
</div>
</body>
</html>"""
