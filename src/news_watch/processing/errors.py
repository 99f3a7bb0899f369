from __future__ import annotations


class ProviderError(Exception):
    """검색/추출 제공자 호출 전체가 실패한 경우 (배치 단위 실패).

    kind: "network" | "timeout" | "http" | "quota" | "parse" | "config"
    """

    def __init__(self, kind: str, message: str = "") -> None:
        self.kind = kind
        self.message = message
        super().__init__(self.to_note())

    def to_note(self) -> str:
        safe = (self.message or "").replace("\n", " ").strip()
        return f"provider_error:{self.kind}:{safe}" if safe else f"provider_error:{self.kind}"
