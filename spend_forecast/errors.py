class ForecastError(Exception):
    detail: str = "Неизвестная ошибка модуля прогноза"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.detail
        super().__init__(self.detail)


class MalformedArtifactError(ForecastError):
    detail = "Артефакт предобученной модели не читается или имеет неверный формат"


class InvalidMonthKeyError(ForecastError, ValueError):
    detail = "Ключ месяца должен иметь формат YYYY-MM-01"
