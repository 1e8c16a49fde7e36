"""Prompt builders for stock-image title, keyword, and category analysis."""

from services.openai.category_taxonomy import CATEGORY_DATASET_NAME, taxonomy_json

OUTPUT_CONVENTION = 'title="title" description="description" keys=[,,] categoryId="id"'


def build_user_prompt() -> str:
    """Return the instruction sent alongside the image."""
    return (
        "Generate title based on main image context with Descriptive title format: "
        "Action or Event Subject, Location, Content Type, Environment, Viewpoint, Concept for SEO Impact "
        "+ description format: explain the story in detail in 150 character. "
        "The title must be strictly 100 - 150 characters long and Do not exceed 150 characters. "
        "Generate 121 keywords using single words or compound words "
        "(e.g., Coffee,Coffee table, High school, Well-being, Long-term, Living room). "
        "Do not create combined words without proper spaces (e.g., livingroom or wrong-room). "
        "Include keywords that cover diverse topics like home, lifestyle, technology, health, and nature. "
        "Ensure 70% are SEO-friendly and 30% are common words. "
        f"+ Analyze category based on '{CATEGORY_DATASET_NAME}' dataset"
    )


def build_system_prompt() -> str:
    """Return the system prompt carrying the taxonomy and the output convention."""
    return (
        f"Always refer to the following '{CATEGORY_DATASET_NAME}' dataset: {taxonomy_json()} "
        "Generate only english contain only correctly spelled words with SEO exclude any brand names, "
        "trademarks, copyrighted terms, genericized trademark, or specific commercial products. "
        f"Output is plain text {OUTPUT_CONVENTION}"
    )
