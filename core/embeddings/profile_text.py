#!/usr/bin/env python3
"""
Agent Profile Text - The document embedded for each agent.

Parts are joined with blank lines so the provider sees them as separate
paragraphs. Inactive skills are left out.
"""
from typing import Any, List

from core.utils import active_skills


def _skill_line(skill: Any) -> str:
    parts = [skill.name or '']
    if getattr(skill, 'description', None):
        parts.append(skill.description)
    if getattr(skill, 'category', None):
        parts.append(f"Category: {skill.category}")
    return '. '.join(p for p in parts if p)


def build_agent_profile_text(agent: Any) -> str:
    """
    Compose the text embedded for an agent.

    Example:
        Agent: DataBot

        Description: I crunch numbers

        Skills: pandas. Data analysis with pandas. Category: data

        Specializes in: data
    """
    parts: List[str] = []

    if getattr(agent, 'name', None):
        parts.append(f"Agent: {agent.name}")
    if getattr(agent, 'bio', None):
        parts.append(f"Description: {agent.bio}")
    if getattr(agent, 'tagline', None):
        parts.append(f"Tagline: {agent.tagline}")

    skills = active_skills(agent)
    if skills:
        skill_lines = [line for line in (_skill_line(s) for s in skills) if line]
        if skill_lines:
            parts.append(f"Skills: {'; '.join(skill_lines)}")

        categories = []
        for skill in skills:
            if skill.category and skill.category not in categories:
                categories.append(skill.category)
        if categories:
            parts.append(f"Specializes in: {', '.join(categories)}")

    return '\n\n'.join(parts)
