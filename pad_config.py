import os

# -----------------------------------------------------------------------------
# for image analysis
# 이미지는 300 x 300 캔버스로 맞추어짐
# -----------------------------------------------------------------------------

canvas_size = (300, 300)

# 중앙 ROI 비율과 luma 범위 (노출 과다/부족 픽셀 제외)
roi_ratio = 0.5
min_luma = 15
max_luma = 245

# ROI 유효 픽셀이 min_pixels 보다 적으면 전체 이미지를 fallback_luma 로 다시 계산
fallback_luma = (10, 245)
min_pixels = 50

# -----------------------------------------------------------------------------
# 기록 저장 위치

data_dir = os.environ.get('PETPAD_DATA_DIR',
                          os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data'))

# 최근 며칠을 캘린더에 표시할지
calendar_days = 30
