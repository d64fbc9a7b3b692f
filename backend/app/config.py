from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # IRCTC PNR API (RapidAPI)
    rapidapi_key: str = ""
    irctc_base_url: str = "https://irctc1.p.rapidapi.com"
    irctc_host: str = "irctc1.p.rapidapi.com"
    pnr_http_timeout: float = 15.0
    pnr_max_retries: int = 1

    # CORS
    cors_origins: str = "http://localhost:3000"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
