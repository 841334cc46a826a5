from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="VMODRESKIN_")

    app_name: str = "vmodreskin"
    log_level: str = "INFO"

    vmod_version: str = "8.0.0"
    vmod_release_url_template: str = (
        "https://github.com/Mu0n/XWVassal/releases/download/"
        "{version}/Star_Wars_X-Wing_Miniatures_Game-{version}.vmod"
    )
    xwing_data_archive_url: str = (
        "https://github.com/guidokessels/xwing-data/archive/refs/heads/master.zip"
    )
    http_timeout: float = 300.0

    work_dir: Path = Path("./tmp")
    keep_work_files: bool = False

    # Override, ignore and name-correction tables
    tables_dir: Path = PACKAGE_DATA_DIR

    # Damage cards are stored smaller in the module than in the data set
    damage_card_width: int = 108
    damage_card_height: int = 162
    jpeg_quality: int = 100
    image_workers: int = 8


settings = Settings()


# =============================================================================
# MODULE FILE CONVENTIONS
# =============================================================================

VMOD_FILENAME_TEMPLATE = "Star_Wars_X-Wing_Miniatures_Game-{version}.vmod"

# Images live under this directory in both the module and the data set
IMAGES_DIRNAME = "images"
