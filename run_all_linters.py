#!/usr/bin/env python3
"""統一的檢查腳本，依序執行格式化檢查、靜態分析與測試。

這個腳本會依序執行：
1. Black 格式化
2. isort 匯入排序
3. Ruff 靜態檢查
4. Pylint 靜態分析
5. pytest 單元測試

所有輸出會集中顯示，方便檢查錯誤。
"""

from pathlib import Path
import subprocess
import sys

PACKAGES = ["app", "core", "infrastructure"]

CHECKS = [
    (["python", "-m", "black", ".", "--check"], "Black 格式化檢查"),
    (["python", "-m", "isort", ".", "--check-only"], "isort 匯入排序檢查"),
    (["python", "-m", "ruff", "check", "."], "Ruff 靜態檢查"),
    (["python", "-m", "pylint", *PACKAGES], "Pylint 靜態分析"),
    (["python", "-m", "pytest", "-q"], "pytest 單元測試"),
]


def run_check(cmd: list[str], description: str) -> tuple[bool, str]:
    """執行單一檢查並返回成功狀態和輸出。"""
    print(f"\n{'=' * 60}\n執行: {description}\n命令: {' '.join(cmd)}\n{'=' * 60}")
    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, check=False, cwd=Path(__file__).parent
        )
    except OSError as e:
        print(f"❌ 執行錯誤: {e}")
        return False, str(e)

    output = result.stdout + result.stderr
    print("✅ 成功" if result.returncode == 0 else "❌ 失敗")
    print(output.strip() or "(無輸出)")
    return result.returncode == 0, output


def main() -> int:
    """依序執行所有檢查，返回程序結束碼。"""
    results = [(description, run_check(cmd, description)[0]) for cmd, description in CHECKS]

    print(f"\n{'=' * 60}\n總結報告\n{'=' * 60}")
    for description, success in results:
        print(f"{description}: {'✅ 通過' if success else '❌ 失敗'}")

    all_passed = all(success for _, success in results)
    print(f"\n整體結果: {'✅ 全部通過' if all_passed else '❌ 有錯誤'}")
    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
