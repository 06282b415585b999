"""
MindStock - 포트폴리오 마인드맵 시각화 서버
Flask 애플리케이션 진입점

- create_app(): Flask 앱 생성
- set_scheduler(): 스케줄러 설정 (모든 로직은 scheduler_config 내부에서 처리)
- main(): 애플리케이션 시작
"""
import logging
import sys
from pathlib import Path

# 프로젝트 루트 경로 추가
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# .env 파일은 config.item에서 로드됨
from flask import Flask
from config.item import HOST, PORT, SECRET_KEY, is_test


def setup_logging(log_file: str = 'app.log') -> None:
    """로깅 설정 (앱 시작 시 한 번)"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(project_root / log_file, encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )


def create_app():
    """
    Flask 애플리케이션 생성

    Returns:
        Flask 애플리케이션 인스턴스
    """
    from config.dependencies import init_dependencies
    from presentation.web.responses import INTERNAL_ERROR, NOT_FOUND, error_response

    app = Flask(__name__)

    # 시크릿 키 설정
    app.secret_key = SECRET_KEY
    app.json.ensure_ascii = False

    # DI 컨테이너 초기화
    init_dependencies(test_mode=is_test)

    # 블루프린트 등록
    from presentation.web.routes import (
        health_bp, auth_bp, stock_bp, exchange_rate_bp, portfolio_bp, mind_map_bp,
    )

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(stock_bp)
    app.register_blueprint(exchange_rate_bp)
    app.register_blueprint(portfolio_bp)
    app.register_blueprint(mind_map_bp)

    # 에러 핸들러
    @app.errorhandler(404)
    def not_found(error):
        """404 Not Found 에러 핸들러"""
        return error_response(NOT_FOUND, "요청한 경로를 찾을 수 없습니다.", 404)

    @app.errorhandler(500)
    def internal_error(error):
        """500 Internal Server Error 핸들러"""
        return error_response(INTERNAL_ERROR, "서버 오류가 발생했습니다.", 500)

    return app


def set_scheduler():
    """
    스케줄러 설정 및 시작

    모든 초기화 로직은 scheduler_config.start_scheduler() 내부에서 처리됩니다.
    - 환율 갱신 작업 등록 (30분 주기)
    - 마인드맵 시뮬레이션 작업 준비
    """
    try:
        from presentation.scheduler.scheduler_config import start_scheduler
        start_scheduler()
    except Exception as e:
        print(f"⚠️ 스케줄러 초기화 실패: {str(e)}")
        print("웹 서버만 실행됩니다.")
        import traceback
        traceback.print_exc()


def main():
    """애플리케이션 시작"""
    setup_logging()

    print("=" * 80)
    print("🚀 MindStock 애플리케이션 시작")
    print("=" * 80)
    print(f"📍 Host: {HOST}")
    print(f"📍 Port: {PORT}")
    print(f"📍 Test Mode: {is_test}")
    print("=" * 80)

    # Flask 앱 생성
    app = create_app()

    # 스케줄러 시작 (환율 갱신은 테스트 모드에서도 필요)
    set_scheduler()

    # Flask 서버 실행
    print(f"\n🌐 Flask 서버 시작...\n")
    app.run(host=HOST, port=PORT, debug=False)


if __name__ == '__main__':
    main()
