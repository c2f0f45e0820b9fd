"""TypeScript and JavaScript generators"""
