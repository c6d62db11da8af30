"""リクエスト/レスポンスのスキーマ"""
