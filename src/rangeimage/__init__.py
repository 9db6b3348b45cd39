"""람다 함수들이 공유하는 랜덤 이미지 리다이렉터 코어."""

__version__ = "0.1.0"
