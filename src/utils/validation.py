"""
Portfolio data validation.

Validates developer and project records before they are loaded into
DynamoDB: required fields, project enums, skill-set structure and the
project -> developer relationship.
"""

from typing import Any, Dict, List, Sequence

from .errors import AppError, ErrorCode

PROJECT_STATUSES = ("Active", "Completed", "Planned")

DEVELOPER_REQUIRED_FIELDS = ("id", "name", "title", "bio", "email", "skillSets")
PROJECT_REQUIRED_FIELDS = ("id", "title", "description", "status", "developerId")


def validate_skill_sets(developer: Dict[str, Any]) -> None:
    """
    Validate the skillSets structure of a developer.

    Each skill set needs a non-empty id, a non-empty name and a non-empty
    skills list.

    Raises:
        AppError: On the first malformed skill set
    """
    developer_id = developer.get("id")
    skill_sets = developer.get("skillSets")
    if skill_sets is None:
        return
    if not isinstance(skill_sets, list):
        raise AppError(
            ErrorCode.INVALID_INPUT,
            f"Developer {developer_id} skillSets must be an array",
        )

    for index, skill_set in enumerate(skill_sets):
        if not isinstance(skill_set, dict):
            raise AppError(
                ErrorCode.INVALID_INPUT,
                f"Developer {developer_id} skillSet at index {index} must be an object",
            )
        if not skill_set.get("id"):
            raise AppError(
                ErrorCode.INVALID_INPUT,
                f"Developer {developer_id} skillSet at index {index} is missing id",
            )
        if not skill_set.get("name"):
            raise AppError(
                ErrorCode.INVALID_INPUT,
                f"Developer {developer_id} skillSet at index {index} is missing name",
            )
        skills = skill_set.get("skills")
        if not isinstance(skills, list):
            raise AppError(
                ErrorCode.INVALID_INPUT,
                f"Developer {developer_id} skillSet at index {index} skills must be an array",
            )
        if not skills:
            raise AppError(
                ErrorCode.INVALID_INPUT,
                f"Developer {developer_id} skillSet at index {index} has no skills",
            )


def validate_portfolio_data(
    developers: Sequence[Dict[str, Any]], projects: Sequence[Dict[str, Any]]
) -> None:
    """
    Validate the relationship between developers and projects.

    Args:
        developers: Developer records
        projects: Project records

    Raises:
        AppError: If a project has no developerId, references a developer
            that does not exist, or a developer has malformed skill sets
    """
    developer_ids = {developer.get("id") for developer in developers}

    for project in projects:
        developer_id = project.get("developerId")
        if not developer_id:
            raise AppError(
                ErrorCode.INVALID_INPUT,
                f"Project {project.get('id')} is missing developerId",
            )
        if developer_id not in developer_ids:
            raise AppError(
                ErrorCode.INVALID_INPUT,
                f"Project {project.get('id')} references non-existent developer {developer_id}",
                {"projectId": project.get("id"), "developerId": developer_id},
            )

    for developer in developers:
        validate_skill_sets(developer)


def validate_developer(developer: Any) -> List[str]:
    """
    Check a developer record for required fields.

    Returns:
        Human-readable problems; empty when the record is valid
    """
    if not isinstance(developer, dict):
        return ["Developer must be an object"]

    errors = [
        f"Developer is missing required field '{field}'"
        for field in DEVELOPER_REQUIRED_FIELDS
        if field not in developer or developer[field] in (None, "")
    ]
    if "skillSets" in developer and not isinstance(developer["skillSets"], list):
        errors.append("Developer skillSets must be an array")
    return errors


def validate_project(project: Any) -> List[str]:
    """
    Check a project record for required fields, status and list shapes.

    Returns:
        Human-readable problems; empty when the record is valid
    """
    if not isinstance(project, dict):
        return ["Project must be an object"]

    label = project.get("id", "<unknown>")
    errors = [
        f"Project {label} is missing required field '{field}'"
        for field in PROJECT_REQUIRED_FIELDS
        if field not in project or project[field] in (None, "")
    ]

    status = project.get("status")
    if status and status not in PROJECT_STATUSES:
        errors.append(f"Project {label} has invalid status '{status}'")

    for list_field in ("highlights", "techStack", "tech"):
        if list_field in project and not isinstance(project[list_field], list):
            errors.append(f"Project {label} {list_field} must be an array")

    for index, part in enumerate(project.get("architecture") or []):
        if not isinstance(part, dict) or not part.get("name") or not part.get("details"):
            errors.append(f"Project {label} architecture[{index}] needs name and details")

    for index, showcase in enumerate(project.get("technicalShowcases") or []):
        if (
            not isinstance(showcase, dict)
            or not showcase.get("title")
            or not showcase.get("description")
            or not isinstance(showcase.get("highlights"), list)
        ):
            errors.append(
                f"Project {label} technicalShowcases[{index}] needs title, description and highlights"
            )

    return errors


def collect_validation_errors(
    developers: Sequence[Dict[str, Any]], projects: Sequence[Dict[str, Any]]
) -> List[str]:
    """Run every record and relationship check, collecting all problems."""
    errors: List[str] = []
    for developer in developers:
        errors.extend(validate_developer(developer))
    for project in projects:
        errors.extend(validate_project(project))
    if not errors:
        try:
            validate_portfolio_data(developers, projects)
        except AppError as e:
            errors.append(e.message)
    return errors
