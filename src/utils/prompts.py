"""
Prompt generation for the AI advocate.

Builds prompts from the developer profile, the developer's projects and the
recruiter context. Rules are grouped by priority and rendered as guidelines
the model must follow.
"""

from typing import Any, Dict, List, Optional, Tuple

from boto3.dynamodb.conditions import Attr

from .dynamodb import scan_all, tables
from .errors import AppError, ErrorCode

PROMPT_RULES: Dict[str, List[Dict[str, str]]] = {
    "accuracy": [
        {
            "priority": "high",
            "rule": (
                "IMPORTANT: Never claim experience for technologies, frameworks, programming "
                "languages or tools which are not explicitly listed in the DEVELOPER_SKILLS "
                "section or mentioned in the DEVELOPER_PROJECTS section."
            ),
        },
        {
            "priority": "high",
            "rule": (
                "For specific questions about technologies not listed in the DEVELOPER_SKILLS "
                "section, suggest asking [name] directly for the most accurate information."
            ),
        },
        {
            "priority": "high",
            "rule": "If you don't know something specific about [name]'s experience, say so clearly.",
        },
    ],
    "style": [
        {"priority": "medium", "rule": "Use natural, conversational language with varied expressions."},
        {"priority": "medium", "rule": "Refer to the developer by name, not as 'the developer'."},
        {
            "priority": "high",
            "rule": (
                "Keep answers concise - typically 2 to 4 short sentences, unless the question "
                "justifiably requires a more detailed response."
            ),
        },
        {
            "priority": "medium",
            "rule": (
                "When relevant to the question, naturally highlight skills from DEVELOPER_SKILLS "
                "section that match requirements in RECRUITER_INTERESTS section."
            ),
        },
        {
            "priority": "medium",
            "rule": (
                "Pay attention to topics the recruiter has asked about in previous questions, "
                "as these indicate their interests."
            ),
        },
    ],
    "special": [
        {"priority": "high", "rule": "For inappropriate questions, politely redirect to professional topics."},
        {"priority": "low", "rule": "Assume the recruiter understands technical terms without explanation."},
        {"priority": "high", "rule": "Don't give professional advice or try to be smarter than the recruiter."},
    ],
}

GREETING_RULES: List[Dict[str, str]] = [
    {
        "priority": "high",
        "rule": "Create a warm, personalized greeting that welcomes the recruiter to [name]'s portfolio.",
    },
    {"priority": "high", "rule": "Keep the greeting concise - 2-3 sentences maximum."},
    {"priority": "high", "rule": "Mention the recruiter's name and company in the greeting."},
    {
        "priority": "high",
        "rule": "If the recruiter has specific skills of interest, briefly highlight [name]'s relevant experience.",
    },
    {"priority": "medium", "rule": "Use a professional but friendly tone."},
    {"priority": "medium", "rule": 'Do not use generic phrases like "I hope this finds you well".'},
    {"priority": "medium", "rule": "Focus on making a positive first impression."},
    {
        "priority": "low",
        "rule": "Avoid technical jargon unless it directly relates to the recruiter's interests.",
    },
]

_PRIORITIES = (("high", "High Priority"), ("medium", "Medium Priority"), ("low", "Low Priority"))


def get_developer_data() -> Optional[Dict[str, Any]]:
    """
    Fetch the developer profile.

    Returns the first record flagged isActive, else the first record, else None.
    """
    response = tables.developers.scan(Limit=10)
    items: List[Dict[str, Any]] = response.get("Items", [])
    if not items:
        return None
    for item in items:
        if item.get("isActive") is True:
            return item
    return items[0]


def get_developer_projects(developer_id: str) -> List[Dict[str, Any]]:
    """Fetch all projects belonging to a developer."""
    if not developer_id:
        raise AppError(ErrorCode.INVALID_INPUT, "Developer ID is required to fetch projects")
    return scan_all(tables.projects, FilterExpression=Attr("developerId").eq(developer_id))


def recruiter_skills(recruiter: Optional[Dict[str, Any]]) -> List[str]:
    if not recruiter:
        return []
    skills = recruiter.get("requiredSkills") or recruiter.get("preferredSkills") or []
    return [skill for skill in skills if isinstance(skill, str)]


def find_relevant_skills(
    recruiter: Optional[Dict[str, Any]], developer: Optional[Dict[str, Any]]
) -> Dict[str, Any]:
    """
    Match recruiter skills against developer skills, case-insensitively.

    An exact match wins; otherwise every developer skill that contains the
    recruiter skill (or is contained by it) counts as a partial match, so
    "React" matches "React.js".

    Returns:
        Dict with matchingSkills, allDeveloperSkills, recruiterSkills, hasMatches
    """
    result: Dict[str, Any] = {
        "matchingSkills": [],
        "allDeveloperSkills": set(),
        "recruiterSkills": [],
        "hasMatches": False,
    }
    if not recruiter or not developer or not developer.get("skillSets"):
        return result

    wanted = recruiter_skills(recruiter)
    result["recruiterSkills"] = wanted
    if not wanted:
        return result

    developer_skills: Dict[str, str] = {}
    for skill_set in developer["skillSets"]:
        for skill in skill_set.get("skills") or []:
            if not isinstance(skill, str):
                continue
            result["allDeveloperSkills"].add(skill)
            developer_skills[skill.lower()] = skill

    for recruiter_skill in wanted:
        lowered = recruiter_skill.lower()
        if lowered in developer_skills:
            result["matchingSkills"].append({"skill": developer_skills[lowered], "type": "exact"})
            continue
        for lower_dev_skill, original in developer_skills.items():
            if lowered in lower_dev_skill or lower_dev_skill in lowered:
                result["matchingSkills"].append(
                    {"skill": original, "type": "partial", "recruiterSkill": recruiter_skill}
                )

    result["hasMatches"] = bool(result["matchingSkills"])
    return result


def format_skills_section(
    developer: Optional[Dict[str, Any]], relevant_skills: Optional[Dict[str, Any]] = None
) -> str:
    if not developer or not developer.get("skillSets"):
        return "- Full-stack developer with experience in web development"

    lines = [
        f"- {skill_set.get('name')}: {', '.join(skill_set.get('skills') or [])}"
        for skill_set in developer["skillSets"]
    ]
    if relevant_skills and relevant_skills.get("hasMatches"):
        matching = ", ".join(match["skill"] for match in relevant_skills["matchingSkills"])
        lines.insert(0, f"- Matching skills: {matching}")
    return "\n".join(lines)


def format_projects_section(projects: Optional[List[Dict[str, Any]]]) -> str:
    if not projects:
        return "- No projects available"

    lines = []
    for project in projects:
        tech = project.get("tech") or project.get("techStack") or []
        technologies = ", ".join(str(t) for t in tech) or "Various technologies"
        lines.append(f"- {project.get('title')}: {technologies}")
    return "\n".join(lines)


def format_experience_section(developer: Optional[Dict[str, Any]]) -> str:
    if not developer:
        return "- Several years of experience in software development"

    lines = []
    if developer.get("yearsOfExperience"):
        lines.append(
            f"- {developer['yearsOfExperience']}+ years of experience as a "
            f"{developer.get('title') or 'developer'}"
        )
    if developer.get("bio"):
        lines.append(f"- {developer['bio']}")
    if developer.get("location"):
        lines.append(f"- Based in {developer['location']}")
    if not lines:
        lines.append("- Experienced developer with a passion for quality code")
    return "\n".join(lines)


def build_rules_section(
    developer_name: str,
    rules: Optional[List[Dict[str, str]]] = None,
    heading: str = "Response Guidelines",
) -> str:
    """
    Render rules grouped by priority, substituting [name].

    Args:
        developer_name: Name used in place of [name]
        rules: Rules to render; defaults to every PROMPT_RULES category
        heading: Section heading
    """
    if rules is None:
        rules = PROMPT_RULES["accuracy"] + PROMPT_RULES["style"] + PROMPT_RULES["special"]

    blocks = []
    for priority, title in _PRIORITIES:
        selected = [r["rule"].replace("[name]", developer_name) for r in rules if r.get("priority") == priority]
        if selected:
            blocks.append(f"{title}:\n" + "\n".join(f"- {rule}" for rule in selected))
    return f"{heading}:\n" + "\n\n".join(blocks)


def _require_developer() -> Dict[str, Any]:
    developer = get_developer_data()
    if not developer:
        raise AppError(
            ErrorCode.CONFIGURATION_ERROR,
            "No developer profile found. Please check that DEVELOPER_TABLE_NAME is set "
            "and the table contains data.",
        )
    return developer


def _names(developer: Dict[str, Any]) -> Tuple[str, str]:
    full_name = developer.get("name") or "the developer"
    return full_name.split(" ")[0], full_name


def _recruiter_context(recruiter: Dict[str, Any]) -> str:
    job_context = ""
    if recruiter.get("jobTitle") or recruiter.get("jobDescription"):
        job_context = f"\nThey are recruiting for: {recruiter.get('jobTitle') or 'a position'}"
        if recruiter.get("jobDescription"):
            job_context += f"\nJob description: {recruiter['jobDescription']}"

    company_context = ""
    if recruiter.get("companyIndustry") or recruiter.get("companySize"):
        company_context = "\nCompany details:"
        if recruiter.get("companyIndustry"):
            company_context += f"\n- Industry: {recruiter['companyIndustry']}"
        if recruiter.get("companySize"):
            company_context += f"\n- Size: {recruiter['companySize']}"

    skills = ", ".join(recruiter_skills(recruiter)) or "Not specified"
    return (
        f"You are responding to {recruiter.get('recruiterName')} from {recruiter.get('companyName')}."
        f"{job_context}{company_context}\n"
        f"Their context is: {recruiter.get('context') or 'Not specified'}\n"
        f"Skills they might be interested in: {skills}\n"
    )


def generate_dynamic_prompt(question: str, recruiter: Optional[Dict[str, Any]]) -> str:
    """
    Build the prompt used to answer a recruiter question.

    Raises:
        AppError: If no developer profile exists
    """
    developer = _require_developer()
    projects = get_developer_projects(developer.get("id", ""))
    relevant = find_relevant_skills(recruiter, developer)
    first_name, full_name = _names(developer)

    history = (recruiter or {}).get("conversationHistory") or []
    conversation_context = (
        f"Context: Previous conversation with {len(history)} messages."
        if history
        else "Context: First interaction with this recruiter."
    )

    sections = [
        _recruiter_context(recruiter) if recruiter else "",
        conversation_context,
        "",
        f"You are an AI Advocate named Alex representing {full_name} in a conversation with a recruiter.",
        (
            f"Your task is to answer the following question about {first_name}'s skills, experience, "
            "or background in a conversational, helpful way. Answer ONLY this specific question:"
        ),
        "",
        f'Question: "{question}"',
        "",
        "===DEVELOPER_SKILLS===",
        format_skills_section(developer, relevant),
        "===END_DEVELOPER_SKILLS===",
        "",
        "===DEVELOPER_PROJECTS===",
        format_projects_section(projects),
        "===END_DEVELOPER_PROJECTS===",
        "",
        "===DEVELOPER_EXPERIENCE===",
        format_experience_section(developer),
        "===END_DEVELOPER_EXPERIENCE===",
        "",
    ]

    if recruiter and recruiter.get("requiredSkills"):
        sections += [
            "===RECRUITER_INTERESTS===",
            f"Job Title: {recruiter.get('jobTitle') or 'Not specified'}",
            f"Job Description: {recruiter.get('jobDescription') or 'Not specified'}",
            f"Required Skills: {', '.join(recruiter.get('requiredSkills') or [])}",
            f"Preferred Skills: {', '.join(recruiter.get('preferredSkills') or [])}",
            "===END_RECRUITER_INTERESTS===",
            "",
        ]

    if history:
        user_messages = [str(m.get("content", "")) for m in history if m.get("role") == "user"]
        sections += [
            "===CONVERSATION_HISTORY===",
            "\n".join(user_messages),
            "===END_CONVERSATION_HISTORY===",
            "",
        ]

    sections.append(build_rules_section(first_name))
    return "\n".join(sections)


def generate_greeting_prompt(recruiter: Dict[str, Any]) -> Dict[str, str]:
    """
    Build the system/user prompt pair for the personalized greeting.

    Raises:
        AppError: If no developer profile exists
    """
    developer = _require_developer()
    projects = get_developer_projects(developer.get("id", ""))
    relevant = find_relevant_skills(recruiter, developer)
    first_name, full_name = _names(developer)

    system_prompt = "\n".join(
        [
            f"You are an AI Advocate named Alex representing {full_name}, a "
            f"{developer.get('title') or 'developer'}, on their portfolio website.",
            "",
            "===DEVELOPER_SKILLS===",
            format_skills_section(developer, relevant),
            "===END_DEVELOPER_SKILLS===",
            "",
            "===DEVELOPER_PROJECTS===",
            format_projects_section(projects),
            "===END_DEVELOPER_PROJECTS===",
            "",
            "===DEVELOPER_EXPERIENCE===",
            format_experience_section(developer),
            "===END_DEVELOPER_EXPERIENCE===",
            "",
            build_rules_section(first_name, GREETING_RULES, heading="Greeting Guidelines"),
        ]
    )

    user_prompt = "\n".join(
        [
            _recruiter_context(recruiter).rstrip("\n"),
            "",
            f"Create a personalized greeting for {recruiter.get('recruiterName')} from "
            f"{recruiter.get('companyName')} who is visiting {first_name}'s portfolio.",
        ]
    )

    return {"systemPrompt": system_prompt, "userPrompt": user_prompt}
