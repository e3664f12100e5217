"""testenv.workspace.samples

Sample test files for the unit, integration and e2e categories.

They double as a reference for the conventions the quality audit checks
(``*.test.js`` naming, ``describe``/``test``/``expect`` structure), so a fresh
workspace passes the structure and naming rules out of the box.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from testenv.io.fs import write_text_atomic
from testenv.log import ConsoleLogger, get_default_logger

UNIT_SAMPLE = """\
const { validateEmail, generateSlug } = require('../../utils/helpers');

describe('Helper Functions', () => {
  describe('validateEmail', () => {
    test('should validate correct email addresses', () => {
      expect(validateEmail('test@example.com')).toBe(true);
      expect(validateEmail('user.name+tag@domain.co.uk')).toBe(true);
    });

    test('should reject invalid email addresses', () => {
      expect(validateEmail('invalid-email')).toBe(false);
      expect(validateEmail('test@')).toBe(false);
      expect(validateEmail('@domain.com')).toBe(false);
    });
  });

  describe('generateSlug', () => {
    test('should generate URL-friendly slugs', () => {
      expect(generateSlug('Hello World')).toBe('hello-world');
      expect(generateSlug('Test & Example')).toBe('test-example');
      expect(generateSlug('  Multiple   Spaces  ')).toBe('multiple-spaces');
    });

    test('should handle special characters', () => {
      expect(generateSlug('Café & Restaurant')).toBe('cafe-restaurant');
      expect(generateSlug('100% Success!')).toBe('100-success');
    });
  });
});
"""

INTEGRATION_SAMPLE = """\
const request = require('supertest');
const app = require('../../app');

describe('User API Integration Tests', () => {
  let authToken;
  let testUser;

  beforeEach(async () => {
    testUser = await global.testHelper.createTestUser({
      email: 'test@example.com',
      role: 'admin'
    });
    authToken = global.testHelper.generateTestToken(testUser._id, 'admin');
  });

  describe('POST /api/users', () => {
    test('should create a new user', async () => {
      const userData = {
        email: 'newuser@example.com',
        password: 'password123',
        firstName: 'New',
        lastName: 'User'
      };

      const response = await request(app)
        .post('/api/users')
        .set('Authorization', `Bearer ${authToken}`)
        .send(userData)
        .expect(201);

      expect(response.body.user.email).toBe(userData.email);
      expect(response.body.user.password).toBeUndefined();
    });

    test('should reject duplicate email', async () => {
      const response = await request(app)
        .post('/api/users')
        .set('Authorization', `Bearer ${authToken}`)
        .send({ email: testUser.email, password: 'password123', firstName: 'Dup', lastName: 'User' });

      expect(response.status).toBe(400);
    });
  });

  describe('GET /api/users', () => {
    test('should return list of users', async () => {
      const response = await request(app)
        .get('/api/users')
        .set('Authorization', `Bearer ${authToken}`)
        .expect(200);

      expect(Array.isArray(response.body.users)).toBe(true);
      expect(response.body.users.length).toBeGreaterThan(0);
    });

    test('should require authentication', async () => {
      const response = await request(app).get('/api/users');
      expect(response.status).toBe(401);
    });
  });
});
"""

E2E_SAMPLE = """\
const puppeteer = require('puppeteer');

describe('E2E Tests', () => {
  let browser;
  let page;
  const baseUrl = process.env.TEST_BASE_URL || 'http://localhost:3000';

  beforeAll(async () => {
    browser = await puppeteer.launch({
      headless: process.env.HEADLESS !== 'false',
      slowMo: process.env.SLOW_MO ? parseInt(process.env.SLOW_MO, 10) : 0
    });
  });

  afterAll(async () => {
    if (browser) {
      await browser.close();
    }
  });

  beforeEach(async () => {
    page = await browser.newPage();
    await page.setViewport({ width: 1280, height: 720 });
  });

  afterEach(async () => {
    if (page) {
      await page.close();
    }
  });

  describe('Login Flow', () => {
    test('should login with valid credentials', async () => {
      await page.goto(`${baseUrl}/login`);
      await page.type('#email', 'admin@test.com');
      await page.type('#password', 'password123');
      await page.click('button[type="submit"]');
      await page.waitForNavigation();

      expect(page.url()).toContain('/dashboard');
    });

    test('should show error for invalid credentials', async () => {
      await page.goto(`${baseUrl}/login`);
      await page.type('#email', 'invalid@test.com');
      await page.type('#password', 'wrongpassword');
      await page.click('button[type="submit"]');

      const errorMessage = await page.waitForSelector('.error-message');
      expect(errorMessage).toBeTruthy();
    });
  });

  describe('Dashboard', () => {
    beforeEach(async () => {
      await page.goto(`${baseUrl}/login`);
      await page.type('#email', 'admin@test.com');
      await page.type('#password', 'password123');
      await page.click('button[type="submit"]');
      await page.waitForNavigation();
    });

    test('should display dashboard metrics', async () => {
      const metricsCards = await page.$$('.metric-card');
      expect(metricsCards.length).toBeGreaterThan(0);
    });

    test('should navigate to contacts page', async () => {
      await page.click('a[href="/contacts"]');
      await page.waitForNavigation();
      expect(page.url()).toContain('/contacts');
    });
  });
});
"""

# Relative path under the test root -> content.
SAMPLE_TESTS: Dict[str, str] = {
    "unit/helpers.test.js": UNIT_SAMPLE,
    "integration/users.test.js": INTEGRATION_SAMPLE,
    "e2e/login.test.js": E2E_SAMPLE,
}


class SampleTestWriter:
    def __init__(self, test_root: Path, *, log: Optional[ConsoleLogger] = None) -> None:
        self.test_root = Path(test_root)
        self._log = log or get_default_logger()

    def write_all(self) -> List[Path]:
        written: List[Path] = []
        for rel, content in SAMPLE_TESTS.items():
            path = self.test_root / rel
            write_text_atomic(path, content)
            self._log.info(f"Created sample test: {rel}")
            written.append(path)
        return written
