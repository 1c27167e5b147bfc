class PetPadError(Exception):
    # 결과 dict의 'error' 코드
    code = 'UNKNOWN'

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class InputError(PetPadError):
    # 파일 미선택, 지원하지 않는 형식 (상태 변경 없음)
    code = 'INPUT'


class ReadError(PetPadError):
    code = 'READ'


class DecodeError(PetPadError):
    code = 'DECODE'


class PersistenceError(PetPadError):
    # 저장소 오류는 로그만 남기고 무시
    code = 'STORAGE'
